"""Catalogue management: commands and handler for product CRUD."""

from protean import handle
from protean.fields import Decimal, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: Decimal(required=True, min_value=0)
    stock_quantity: Integer(required=True, min_value=0)
    image_url: String(max_length=1024)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    description: Text()
    price: Decimal(required=True, min_value=0)
    stock_quantity: Integer(required=True, min_value=0)
    image_url: String(max_length=1024)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            stock_quantity=command.stock_quantity,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            stock_quantity=command.stock_quantity,
            image_url=command.image_url,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_deleted", product_id=str(command.product_id))


def list_products():
    """All catalogue products, newest first."""
    repo = current_domain.repository_for(Product)
    return repo.query.order_by("-created_at").limit(None).all().items


def get_product(product_id):
    return current_domain.repository_for(Product).get(product_id)
