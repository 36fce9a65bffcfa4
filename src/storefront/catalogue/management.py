"""Product administration: commands and handler."""

import json

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(default=0, min_value=0)
    category: String(max_length=100)
    images: Text()  # JSON list of image URLs
    rating: Float(default=0.0)
    active: Boolean(default=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(default=0)
    category: String(max_length=100)
    images: Text()  # JSON list of image URLs
    active: Boolean(default=True)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _image_list(raw):
    if not raw:
        return []
    return json.loads(raw) if isinstance(raw, str) else list(raw)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
            stock_quantity=command.stock_quantity,
            category=command.category,
            images=_image_list(command.images),
            rating=command.rating,
            active=command.active,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            price=command.price,
            stock_quantity=command.stock_quantity,
            description=command.description,
            category=command.category,
            images=_image_list(command.images),
            active=command.active,
        )
        repo.add(product)
        logger.info("Product updated", product_id=command.product_id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("Product deleted", product_id=command.product_id)
