from record_access.applications.query.entity_schema import EntitySchema
from record_access.domain.models.parameter import INT32_MAX, INT32_MIN, ParameterSpec, ParamType
from record_access.infrastructure.persistence import tables


def _string(length: int) -> ParameterSpec:
    return ParameterSpec(type=ParamType.STRING, max_length=length)


_ID = ParameterSpec(type=ParamType.INTEGER, min_value=INT32_MIN, max_value=INT32_MAX)
_FLAG = ParameterSpec(type=ParamType.BOOLEAN)

PRODUCT_SCHEMA = EntitySchema(
    name="product",
    table=tables.products,
    key="id",
    readable=("id", "name", "description", "price", "category", "in_stock", "created_date", "is_active"),
    parameters={
        "id": _ID,
        "name": _string(tables.PRODUCT_NAME_LENGTH),
        "description": _string(tables.PRODUCT_DESCRIPTION_LENGTH),
        "price": ParameterSpec(type=ParamType.DECIMAL, precision=tables.PRICE_PRECISION, scale=tables.PRICE_SCALE),
        "category": _string(tables.PRODUCT_CATEGORY_LENGTH),
        "in_stock": _FLAG,
        "is_active": _FLAG,
    },
    insertable=("name", "description", "price", "category", "in_stock"),
    required=("name", "price", "category"),
    ordering_key="id",
)

USER_SCHEMA = EntitySchema(
    name="user",
    table=tables.users,
    key="id",
    readable=("id", "username", "email", "created_date", "is_active", "role"),
    parameters={
        "id": _ID,
        "username": _string(tables.USERNAME_LENGTH),
        "email": _string(tables.EMAIL_LENGTH),
        "password": _string(tables.PASSWORD_HASH_LENGTH),
        "role": _string(tables.ROLE_LENGTH),
        "is_active": _FLAG,
    },
    insertable=("username", "email", "password", "role"),
    required=("username", "email", "password"),
    secret=("password",),
    unique=("username",),
    ordering_key="id",
)
