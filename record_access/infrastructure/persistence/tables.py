from sqlalchemy import Boolean, Column, DateTime, Integer, MetaData, Numeric, String, Table, false, func, true

metadata = MetaData()

USERNAME_LENGTH = 64
EMAIL_LENGTH = 255
PASSWORD_HASH_LENGTH = 256
ROLE_LENGTH = 32

PRODUCT_NAME_LENGTH = 100
PRODUCT_DESCRIPTION_LENGTH = 1000
PRODUCT_CATEGORY_LENGTH = 64
PRICE_PRECISION = 12
PRICE_SCALE = 2

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(USERNAME_LENGTH), nullable=False, unique=True),
    Column("email", String(EMAIL_LENGTH), nullable=False),
    Column("password", String(PASSWORD_HASH_LENGTH), nullable=False),
    Column("created_date", DateTime, nullable=False, server_default=func.now()),
    Column("is_active", Boolean, nullable=False, server_default=true()),
    Column("role", String(ROLE_LENGTH), nullable=True),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(PRODUCT_NAME_LENGTH), nullable=False),
    Column("description", String(PRODUCT_DESCRIPTION_LENGTH), nullable=True),
    Column("price", Numeric(PRICE_PRECISION, PRICE_SCALE), nullable=False),
    Column("category", String(PRODUCT_CATEGORY_LENGTH), nullable=False, index=True),
    Column("in_stock", Boolean, nullable=False, server_default=false()),
    Column("created_date", DateTime, nullable=False, server_default=func.now()),
    Column("is_active", Boolean, nullable=False, server_default=true()),
)
