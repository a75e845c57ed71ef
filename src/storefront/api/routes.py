"""FastAPI routes for the Storefront: accounts, catalogue, cart and orders."""

from fastapi import APIRouter, Depends, HTTPException, status
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddCartItemRequest,
    CartItemIdResponse,
    CartResponse,
    CreateOrderRequest,
    DeletedCountResponse,
    OrderResponse,
    ProductIdResponse,
    ProductRequest,
    ProductResponse,
    RegisterUserRequest,
    StatusResponse,
    UpdateCartItemRequest,
    UserIdResponse,
    UserResponse,
)
from storefront.api.security import current_user, require_admin
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItemQuantity
from storefront.cart.summary import summarize_cart
from storefront.catalogue.management import (
    AddProduct,
    DeleteProduct,
    UpdateProduct,
    get_product,
    list_products,
)
from storefront.identity.administration import DeleteNonAdminUsers, DeleteUser
from storefront.identity.passwords import hash_password
from storefront.identity.registration import RegisterUser
from storefront.identity.user import User
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder


# ---------------------------------------------------------------------------
# Representations
# ---------------------------------------------------------------------------
def _address(address):
    if address is None:
        return None
    return {
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "postal_code": address.postal_code,
        "country": address.country,
    }


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id),
        items=[
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "subtotal": item.subtotal,
            }
            for item in order.items
        ],
        total_amount=order.total_amount,
        created_at=order.created_at,
        shipping_address=_address(order.shipping_address),
        payment_details={
            "method": order.payment.method,
            "status": order.payment.status,
            "transaction_id": order.payment.transaction_id,
            "settled_at": order.payment.settled_at,
            "billing_address": _address(order.payment.billing_address),
        },
        status=order.status,
    )


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        stock_quantity=product.stock_quantity,
        image_url=product.image_url,
    )


def _user_response(user: User) -> UserResponse:
    return UserResponse(id=str(user.id), name=user.name, email=user.email)


# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/register", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password, current_domain.PASSWORD_HASH_ITERATIONS),
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@auth_router.delete("/users/{user_id}", response_model=StatusResponse)
async def delete_user(user_id: str, admin: User = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteUser(user_id=user_id, requested_by=admin.id), asynchronous=False)
    return StatusResponse()


@auth_router.delete("/users", response_model=DeletedCountResponse)
async def delete_non_admin_users(admin: User = Depends(require_admin)) -> DeletedCountResponse:
    deleted = current_domain.process(DeleteNonAdminUsers(requested_by=admin.id), asynchronous=False)
    return DeletedCountResponse(deleted=deleted)


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.get("", response_model=list[UserResponse])
async def list_users(admin: User = Depends(require_admin)) -> list[UserResponse]:
    return [_user_response(user) for user in current_domain.repository_for(User).find_all()]


@user_router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(email: str, user: User = Depends(current_user)) -> UserResponse:
    if not user.is_admin and user.email != email.strip().lower():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to view this user")

    found = current_domain.repository_for(User).find_by_email(email)
    if found is None:
        raise ObjectNotFoundError(f"User with email {email} not found")
    return _user_response(found)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def get_products() -> list[ProductResponse]:
    return [_product_response(product) for product in list_products()]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product_by_id(product_id: str) -> ProductResponse:
    return _product_response(get_product(product_id))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: ProductRequest, admin: User = Depends(require_admin)) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: ProductRequest, admin: User = Depends(require_admin)
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return _product_response(get_product(product_id))


@product_router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, admin: User = Depends(require_admin)) -> None:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(user: User = Depends(current_user)) -> CartResponse:
    return CartResponse(**summarize_cart(user.id))


@cart_router.post("/items", status_code=201, response_model=CartItemIdResponse)
async def add_cart_item(body: AddCartItemRequest, user: User = Depends(current_user)) -> CartItemIdResponse:
    command = AddToCart(
        user_id=user.id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(item_id=result)


@cart_router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, user: User = Depends(current_user)
) -> CartResponse:
    command = UpdateCartItemQuantity(
        user_id=user.id,
        item_id=item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse(**summarize_cart(user.id))


@cart_router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, user: User = Depends(current_user)) -> CartResponse:
    current_domain.process(RemoveFromCart(user_id=user.id, item_id=item_id), asynchronous=False)
    return CartResponse(**summarize_cart(user.id))


@cart_router.delete("", status_code=204)
async def clear_cart(user: User = Depends(current_user)) -> None:
    current_domain.process(ClearCart(user_id=user.id), asynchronous=False)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, user: User = Depends(current_user)) -> OrderResponse:
    """Place an order from the caller's cart.

    Returns immediately with the order in PENDING_PAYMENT; the settlement
    outcome only shows up on later reads.
    """
    command = PlaceOrder(
        user_id=user.id,
        shipping_address=body.shipping_address.model_dump(),
        billing_address=body.billing_address.model_dump(),
        payment_method=body.payment_method.value,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return _order_response(order)


@order_router.get("", response_model=list[OrderResponse])
async def get_orders(user: User = Depends(current_user)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).find_all_by_user(user.id)
    return [_order_response(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: User = Depends(current_user)) -> OrderResponse:
    order = current_domain.repository_for(Order).find_by_id_and_user(order_id, user.id)
    if order is None:
        raise ObjectNotFoundError(f"Order {order_id} not found")
    return _order_response(order)
