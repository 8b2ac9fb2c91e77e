"""
Application startup initialization.

Imports every model so the metadata is complete, wires the domain event
handlers and runs the startup checks before the app serves requests.
"""

import logging
import sys
from typing import List, Tuple

import sqlalchemy as sa
from sqlalchemy import text

from core.config import settings
from core.database import engine
from core.email_config import get_email_settings
from core.events import register_event_handler

logger = logging.getLogger(__name__)

REQUIRED_TABLES = [
    "restaurants",
    "staff_roles",
    "orders",
    "customer_profiles",
    "loyalty_programs",
    "profiles",
]


def import_models():
    """Import every model module so Base.metadata knows all tables"""
    import modules.restaurants.models  # noqa: F401
    import modules.menu.models  # noqa: F401
    import modules.staff.models  # noqa: F401
    import modules.customers.models  # noqa: F401
    import modules.orders.models  # noqa: F401
    import modules.loyalty.models  # noqa: F401
    import modules.reservations.models  # noqa: F401
    import modules.inventory.models  # noqa: F401
    import modules.analytics.models  # noqa: F401
    import modules.promotions.models  # noqa: F401
    import modules.auth.models  # noqa: F401


def register_domain_handlers():
    """Subscribe the in-process handlers to their domain events"""
    from modules.loyalty.services.order_served_handler import on_order_served
    from modules.orders.events.order_events import ORDER_SERVED
    from modules.restaurants.events.restaurant_events import RESTAURANT_CREATED
    from modules.staff.services.role_seeding_service import on_restaurant_created

    register_event_handler(RESTAURANT_CREATED, on_restaurant_created)
    register_event_handler(ORDER_SERVED, on_order_served)


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_database_connection(self) -> bool:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except Exception as e:
            self.errors.append(f"Database connection failed: {str(e)}")
            return False

    def check_required_tables(self) -> bool:
        try:
            existing_tables = sa.inspect(engine).get_table_names()
        except Exception as e:
            self.warnings.append(f"Could not check database tables: {str(e)}")
            return True

        missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]
        if missing_tables:
            self.warnings.append(
                f"Missing database tables: {', '.join(missing_tables)}. "
                "Run migrations with: alembic upgrade head"
            )
        return True

    def check_integrations(self) -> bool:
        if not settings.identity_provider_configured:
            self.warnings.append("SUPABASE_URL / SUPABASE_KEY not set - auth endpoints will fail")
        if not get_email_settings().is_configured:
            self.warnings.append("Email hook not configured - auth emails will be skipped")
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        checks = [
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.check_required_tables),
            ("Integrations", self.check_integrations),
        ]

        all_passed = True
        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False
        return all_passed, self.errors, self.warnings


def run_startup_checks():
    """Run all startup validation checks"""
    logger.info("=" * 60)
    logger.info("Starting ZapDine Backend")
    logger.info(f"Environment: {settings.environment}")
    logger.info("=" * 60)

    passed, errors, warnings = StartupValidator().validate_all()

    for warning in warnings:
        logger.warning(f"  {warning}")
    for error in errors:
        logger.error(f"  {error}")

    if not passed and settings.is_production:
        logger.error("Cannot start in production with errors!")
        sys.exit(1)
    elif not passed:
        logger.warning("Starting in development mode despite errors")
    else:
        logger.info("All startup checks passed")
    return passed, warnings


def configure_startup_logging():
    """Configure logging for startup"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
