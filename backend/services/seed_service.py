"""
Demo dataset loader.

Populates an empty database with two users, three categories, 25 products
and a few orders. Orders reference products 1 and 3, so those two cannot be
deleted while product 2 can.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Category, Order, OrderItem, Product, User
from domain.enums import OrderStatus, Role
from services.auth_service import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "123456"
IMG_BASE_URL = "https://raw.githubusercontent.com/devsuperior/dscatalog-resources/master/backend/img"
LOREM = "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor incididunt ut labore et dolore magna aliqua."

USERS = [
    # (name, email, phone, role)
    ("Maria Brown", "maria@gmail.com", "988888888", Role.CLIENT),
    ("Alex Green", "alex@gmail.com", "977777777", Role.ADMIN),
]

CATEGORIES = ["Books", "Electronics", "Computers"]

# (name, price, category index into CATEGORIES)
PRODUCTS = [
    ("The Lord of the Rings", 90.5, 0),
    ("Smart TV", 2190.0, 1),
    ("Macbook Pro", 1250.0, 2),
    ("PC Gamer", 1200.0, 2),
    ("Rails for Dummies", 100.99, 0),
    ("PC Gamer Ex", 1350.0, 2),
    ("PC Gamer X", 1350.0, 2),
    ("PC Gamer Alfa", 1850.0, 2),
    ("PC Gamer Tera", 1950.0, 2),
    ("PC Gamer Y", 1700.0, 2),
    ("PC Gamer Nitro", 1450.0, 2),
    ("PC Gamer Card", 1850.0, 2),
    ("PC Gamer Plus", 1350.0, 2),
    ("PC Gamer Hera", 2250.0, 2),
    ("PC Gamer Weed", 2200.0, 2),
    ("PC Gamer Max", 2340.0, 2),
    ("PC Gamer Turbo", 1280.0, 2),
    ("PC Gamer Hot", 1450.0, 2),
    ("PC Gamer Ez", 1750.0, 2),
    ("PC Gamer Tr", 1650.0, 2),
    ("PC Gamer Tx", 1680.0, 2),
    ("PC Gamer Er", 1850.0, 2),
    ("PC Gamer Min", 2250.0, 2),
    ("PC Gamer Boo", 2350.0, 2),
    ("PC Gamer Foo", 4170.0, 2),
]

# (client index into USERS, status, [(product number, quantity)])
ORDERS = [
    (0, OrderStatus.PAID, [(1, 2), (3, 1)]),
    (1, OrderStatus.DELIVERED, [(3, 1)]),
    (0, OrderStatus.WAITING_PAYMENT, [(1, 1)]),
]


async def seed_demo_data(db: AsyncSession, *, rounds: int | None = None) -> bool:
    """
    Insert the demo dataset if the database has no users yet.

    Args:
        rounds: bcrypt cost override (tests use the minimum)

    Returns:
        True if data was inserted, False if the database was already populated.
    """
    user_count = await db.scalar(select(func.count(User.id)))
    if user_count:
        return False

    password_hash = hash_password(DEMO_PASSWORD, rounds=rounds)
    users = [
        User(name=name, email=email, phone=phone, role=role.value, password_hash=password_hash)
        for name, email, phone, role in USERS
    ]
    db.add_all(users)
    await db.flush()

    categories = [Category(name=name) for name in CATEGORIES]
    db.add_all(categories)
    await db.flush()

    products = [
        Product(
            name=name,
            description=LOREM,
            price=price,
            img_url=f"{IMG_BASE_URL}/{number}-big.jpg",
            categories=[categories[cat]],
        )
        for number, (name, price, cat) in enumerate(PRODUCTS, start=1)
    ]
    db.add_all(products)
    await db.flush()

    for client_idx, status, lines in ORDERS:
        order = Order(client=users[client_idx], status=status.value)
        for number, quantity in lines:
            product = products[number - 1]
            order.items.append(OrderItem(product=product, quantity=quantity, price=product.price))
        db.add(order)
    await db.flush()

    logger.info(
        f"Seeded demo data: {len(users)} users, {len(categories)} categories, "
        f"{len(products)} products, {len(ORDERS)} orders"
    )
    return True
