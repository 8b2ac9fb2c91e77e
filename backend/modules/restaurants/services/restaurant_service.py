# backend/modules/restaurants/services/restaurant_service.py

import logging
from typing import List

from sqlalchemy.orm import Session

from core.auth import AuthUser
from core.events import emit_event
from core.exceptions import ConflictError, NotFoundError
from ..events.restaurant_events import RestaurantCreatedEvent
from ..models.restaurant_models import Restaurant, RestaurantTable
from ..schemas.restaurant_schemas import (
    RestaurantCreate, RestaurantUpdate, TableCreate, TableStatusUpdate,
)

logger = logging.getLogger(__name__)


class RestaurantService:
    """Restaurant account and dining table management"""

    def __init__(self, db: Session):
        self.db = db

    def create_restaurant(self, data: RestaurantCreate, owner: AuthUser) -> Restaurant:
        """
        Create a restaurant owned by the caller.

        The restaurant insert and everything the ``restaurant.created``
        handlers write (default staff roles) commit together.
        """
        restaurant = Restaurant(owner_id=owner.id, **data.model_dump())
        self.db.add(restaurant)
        try:
            self.db.flush()
            emit_event(
                self.db,
                RestaurantCreatedEvent(restaurant_id=restaurant.id, owner_id=owner.id),
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(restaurant)
        logger.info(f"Created restaurant {restaurant.id} for owner {owner.id}")
        return restaurant

    def list_owned(self, owner: AuthUser) -> List[Restaurant]:
        return (
            self.db.query(Restaurant)
            .filter(Restaurant.owner_id == owner.id)
            .order_by(Restaurant.created_at.desc())
            .all()
        )

    def update_restaurant(self, restaurant: Restaurant, data: RestaurantUpdate) -> Restaurant:
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(restaurant, field, value)
        self.db.commit()
        self.db.refresh(restaurant)
        return restaurant

    def add_table(self, restaurant_id: int, data: TableCreate) -> RestaurantTable:
        existing = (
            self.db.query(RestaurantTable)
            .filter(
                RestaurantTable.restaurant_id == restaurant_id,
                RestaurantTable.table_number == data.table_number,
            )
            .first()
        )
        if existing:
            raise ConflictError(f"Table {data.table_number} already exists")

        table = RestaurantTable(restaurant_id=restaurant_id, **data.model_dump())
        self.db.add(table)
        self.db.commit()
        self.db.refresh(table)
        return table

    def list_tables(self, restaurant_id: int) -> List[RestaurantTable]:
        return (
            self.db.query(RestaurantTable)
            .filter(RestaurantTable.restaurant_id == restaurant_id)
            .order_by(RestaurantTable.table_number)
            .all()
        )

    def update_table_status(
        self, restaurant_id: int, table_id: int, data: TableStatusUpdate
    ) -> RestaurantTable:
        table = (
            self.db.query(RestaurantTable)
            .filter(
                RestaurantTable.id == table_id,
                RestaurantTable.restaurant_id == restaurant_id,
            )
            .first()
        )
        if not table:
            raise NotFoundError(f"Table {table_id} not found")

        table.status = data.status
        self.db.commit()
        self.db.refresh(table)
        return table
