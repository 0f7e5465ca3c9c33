"""Procedure handlers exposed through the RPC endpoint."""

from __future__ import annotations

from datetime import datetime

from ...constants.products import PRODUCT_CATEGORIES
from ...errors import BadRequestError, NotFoundError, UnauthorizedError
from ...models import (
    AccountItemCreate,
    CategoryCreate,
    ProductAvailability,
    ProductOverrideUpdate,
    TransactionCreate,
)
from ...services.checkout import (
    Cart,
    OrderDetails,
    generate_order_message,
    on_demand_request_message,
    whatsapp_url,
)
from ...services.finance import TransactionFilters
from .inputs import (
    AccountUpdateInput,
    CategoryUpdateInput,
    CheckoutInput,
    DateRangeInput,
    IdInput,
    LoginInput,
    OnDemandInput,
    ProductUpdateInput,
    TransactionConfirmInput,
    TransactionListInput,
    TransactionUpdateInput,
)
from .registry import CallContext, registry

OK = {"ok": True}


def _now() -> datetime:
    return datetime.now()


# Auth


@registry.mutation("auth.login", input_model=LoginInput)
def login(ctx: CallContext, data: LoginInput):
    ctx.new_session_token = ctx.services.auth.login(data.username, data.password)
    return {"ok": True, "role": "admin"}


@registry.mutation("auth.logout")
def logout(ctx: CallContext, _data):
    ctx.clear_session = True
    return OK


@registry.query("auth.me")
def me(ctx: CallContext, _data):
    if not ctx.is_admin:
        raise UnauthorizedError()
    return {"role": ctx.role}


# Catalog


@registry.query("catalog.products.list")
def list_products(ctx: CallContext, _data):
    return {"items": ctx.services.catalog.list(), "categories": PRODUCT_CATEGORIES}


@registry.mutation("catalog.products.update", admin=True, input_model=ProductUpdateInput)
def update_product(ctx: CallContext, data: ProductUpdateInput):
    changes = ProductOverrideUpdate(price=data.price, availability=data.availability)
    ctx.services.catalog.update(data.id, changes)
    return OK


@registry.mutation("catalog.products.reset", admin=True, input_model=IdInput)
def reset_product(ctx: CallContext, data: IdInput):
    ctx.services.catalog.reset(data.id)
    return OK


# Finance: categories


@registry.query("finance.categories.list", admin=True)
def list_categories(ctx: CallContext, _data):
    return {"items": ctx.services.categories.list()}


@registry.mutation("finance.categories.create", admin=True, input_model=CategoryCreate)
def create_category(ctx: CallContext, data: CategoryCreate):
    return {"item": ctx.services.categories.create(data)}


@registry.mutation("finance.categories.update", admin=True, input_model=CategoryUpdateInput)
def update_category(ctx: CallContext, data: CategoryUpdateInput):
    return {"item": ctx.services.categories.update(data.id, data.data)}


@registry.mutation("finance.categories.delete", admin=True, input_model=IdInput)
def delete_category(ctx: CallContext, data: IdInput):
    ctx.services.categories.delete(data.id)
    return OK


# Finance: transactions


@registry.query("finance.transactions.list", admin=True, input_model=TransactionListInput)
def list_transactions(ctx: CallContext, data: TransactionListInput):
    filters = TransactionFilters(
        date_range=data.to_range(),
        status=data.status,
        type=data.type,
        category_id=data.category_id,
    )
    return {"items": ctx.services.transactions.list(filters)}


@registry.mutation("finance.transactions.create", admin=True, input_model=TransactionCreate)
def create_transaction(ctx: CallContext, data: TransactionCreate):
    return {"item": ctx.services.transactions.create(data)}


@registry.mutation("finance.transactions.update", admin=True, input_model=TransactionUpdateInput)
def update_transaction(ctx: CallContext, data: TransactionUpdateInput):
    return {"item": ctx.services.transactions.update(data.id, data.data)}


@registry.mutation("finance.transactions.delete", admin=True, input_model=IdInput)
def delete_transaction(ctx: CallContext, data: IdInput):
    ctx.services.transactions.delete(data.id)
    return OK


@registry.mutation("finance.transactions.confirm", admin=True, input_model=TransactionConfirmInput)
def confirm_transaction(ctx: CallContext, data: TransactionConfirmInput):
    return {"item": ctx.services.transactions.confirm(data.id, data.payment_method)}


@registry.mutation("finance.transactions.cancel", admin=True, input_model=IdInput)
def cancel_transaction(ctx: CallContext, data: IdInput):
    return {"item": ctx.services.transactions.cancel(data.id)}


@registry.query("finance.transactions.export.csv", admin=True, input_model=DateRangeInput)
def export_transactions_csv(ctx: CallContext, data: DateRangeInput):
    return {"csv": ctx.services.reports.export_csv(data.to_range())}


# Finance: accounts


@registry.query("finance.accounts.list", admin=True)
def list_accounts(ctx: CallContext, _data):
    return {"items": ctx.services.accounts.list()}


@registry.mutation("finance.accounts.create", admin=True, input_model=AccountItemCreate)
def create_account(ctx: CallContext, data: AccountItemCreate):
    return {"item": ctx.services.accounts.create(data)}


@registry.mutation("finance.accounts.update", admin=True, input_model=AccountUpdateInput)
def update_account(ctx: CallContext, data: AccountUpdateInput):
    return {"item": ctx.services.accounts.update(data.id, data.data)}


@registry.mutation("finance.accounts.delete", admin=True, input_model=IdInput)
def delete_account(ctx: CallContext, data: IdInput):
    ctx.services.accounts.delete(data.id)
    return OK


@registry.mutation("finance.accounts.pay", admin=True, input_model=IdInput)
def pay_account(ctx: CallContext, data: IdInput):
    return {"item": ctx.services.accounts.pay(data.id)}


# Finance: dashboard


@registry.query("finance.dashboard.summary", admin=True, input_model=DateRangeInput)
def dashboard_summary(ctx: CallContext, data: DateRangeInput):
    return ctx.services.reports.summary(data.to_range())


# Checkout


@registry.mutation("checkout.whatsapp", input_model=CheckoutInput)
def checkout_whatsapp(ctx: CallContext, data: CheckoutInput):
    cart = Cart.from_dict({"items": data.items}).repriced(ctx.services.catalog.list())
    order = OrderDetails(
        cart=cart,
        customer_name=data.customer_name,
        customer_phone=data.customer_phone,
        delivery_method=data.delivery_method,
        payment_method=data.payment_method,
        customer_address=data.customer_address,
        delivery_date=data.delivery_date,
        notes=data.notes,
    )
    order.validate()
    message = generate_order_message(order, _now())
    return {
        "message": message,
        "url": whatsapp_url(message),
        "total": cart.total,
        "total_quantity": cart.total_quantity,
    }


@registry.mutation("checkout.onDemand", input_model=OnDemandInput)
def checkout_on_demand(ctx: CallContext, data: OnDemandInput):
    product = next((p for p in ctx.services.catalog.list() if p.id == data.product_id), None)
    if product is None:
        raise NotFoundError("Produto não encontrado.")
    if product.availability == ProductAvailability.UNAVAILABLE:
        raise BadRequestError(f"{product.name} está indisponível no momento.")
    message = on_demand_request_message(product.name, data.quantity, _now())
    return {"message": message, "url": whatsapp_url(message)}
