from record_access.applications.interfaces.dtos.product import ProductPublic, ProductSchema
from record_access.domain.models.product import NewProduct
from record_access.domain.ports.repositories.product_repository import ProductRepository
from record_access.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class CreateProductUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_data: ProductSchema) -> ProductPublic:
        logger.info("Creating product in category %s", product_data.category)

        product = NewProduct(
            name=product_data.name,
            description=product_data.description,
            price=product_data.price,
            category=product_data.category,
            in_stock=product_data.in_stock,
        )

        result = await self.product_repository.create(product)
        created = result.record

        logger.info("Product created successfully: id=%s", created.id)

        return ProductPublic.model_validate(created, from_attributes=True)
