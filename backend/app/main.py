from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.exceptions import register_exception_handlers
from app.startup import (
    configure_startup_logging,
    import_models,
    register_domain_handlers,
    run_startup_checks,
)

# ========== Restaurants & Staff ==========
from modules.restaurants.routes import router as restaurant_router
from modules.staff.routes import router as staff_router

# ========== Menu & Inventory ==========
from modules.menu.routes import router as menu_router
from modules.inventory.routes import router as inventory_router

# ========== Orders & Reservations ==========
from modules.orders.routes import router as order_router
from modules.reservations.routes import router as reservation_router

# ========== Customers & Loyalty ==========
from modules.customers.routes import router as customer_router
from modules.loyalty.routes import router as loyalty_router

# ========== Analytics ==========
from modules.analytics.routers import router as analytics_router
from modules.promotions.routers import router as promotion_router

# ========== Auth & Email Hooks ==========
from modules.auth.routes import router as auth_router
from modules.email.routers import router as email_hook_router

configure_startup_logging()
import_models()
register_domain_handlers()

app = FastAPI(
    title="ZapDine - Restaurant Management API",
    description="""
    Restaurant management platform API.

    ## Features

    * **Restaurants & Tables** - Restaurant setup and floor tables
    * **Staff** - Roles (seeded per restaurant), members and shifts
    * **Menu & Inventory** - Menu items, stock, suppliers and recipe links
    * **Orders** - Order intake, status lifecycle and kitchen notifications
    * **Reservations** - Table bookings and live table availability
    * **Customers & Loyalty** - Diner profiles, points earned and redeemed per order
    * **Analytics** - Popular items, revenue trends, low stock, daily sales, feedback
    * **Auth** - Sign-up and sign-in by email or username

    ## Authentication

    Protected endpoints expect the identity provider's access token as a
    Bearer token. Obtain one from `/api/v1/auth/sign-in`.
    """,
    version="1.0.0",
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========== Include all routers (auth first) ==========
app.include_router(auth_router, prefix="/api/v1")
app.include_router(restaurant_router, prefix="/api/v1")
app.include_router(staff_router, prefix="/api/v1")
app.include_router(menu_router, prefix="/api/v1")
app.include_router(inventory_router, prefix="/api/v1")
app.include_router(order_router, prefix="/api/v1")
app.include_router(reservation_router, prefix="/api/v1")
app.include_router(customer_router, prefix="/api/v1")
app.include_router(loyalty_router, prefix="/api/v1")
app.include_router(analytics_router, prefix="/api/v1")
app.include_router(promotion_router, prefix="/api/v1")

# Called by the identity provider's send-email hook
app.include_router(email_hook_router)


@app.on_event("startup")
async def startup_event():
    """Run startup validation checks"""
    run_startup_checks()


@app.get("/")
def read_root():
    return {"message": "ZapDine backend is running"}
