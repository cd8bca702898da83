"""Tool: search-products

Searches the Kroger product catalog. Authenticates with the OAuth2
client-credentials grant and reuses the token from the caller's credential
store until it expires.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from toolkit import render
from toolkit.contract import CallerContext, InputSchema, Schema, ToolResult, define
from toolkit.credentials import bearer_token
from toolkit.extract import as_list
from toolkit.http import bearer, parse


class ProductSearchInput(InputSchema):
    term: str = Field(..., min_length=1, description="Search term, e.g. 'milk'")
    location_id: Optional[str] = Field(None, description="Kroger store location id for local pricing")
    limit: int = Field(10, ge=1, le=50, description="Maximum number of products")


class ImageSize(BaseModel):
    size: Optional[str] = None
    url: Optional[str] = None


class ProductImage(BaseModel):
    perspective: Optional[str] = None
    featured: Optional[bool] = None
    sizes: Optional[List[ImageSize]] = None


class ItemPrice(BaseModel):
    regular: Optional[float] = None
    promo: Optional[float] = None


class ProductItem(BaseModel):
    size: Optional[str] = None
    price: Optional[ItemPrice] = None


class KrogerProduct(BaseModel):
    productId: str
    description: str = ""
    brand: Optional[str] = None
    images: Optional[List[ProductImage]] = None
    items: Optional[List[ProductItem]] = None


class ProductsResponse(BaseModel):
    data: Optional[List[KrogerProduct]] = None


class Product(Schema):
    product_id: str
    description: str
    brand: Optional[str] = None
    image_url: Optional[str] = None
    size: Optional[str] = None
    price: Optional[float] = None


class ProductSearchOutput(Schema):
    products: List[Product]


def _image_url(product: KrogerProduct) -> Optional[str]:
    images = as_list(product.images)
    featured = [image for image in images if image.featured] or images
    for image in featured:
        for size in as_list(image.sizes):
            if size.size in ("medium", "large") and size.url:
                return size.url
        for size in as_list(image.sizes):
            if size.url:
                return size.url
    return None


def _to_product(product: KrogerProduct) -> Product:
    items = as_list(product.items)
    item = items[0] if items else None
    price = None
    if item is not None and item.price is not None:
        price = item.price.promo or item.price.regular
    return Product(
        product_id=product.productId,
        description=product.description,
        brand=product.brand,
        image_url=_image_url(product),
        size=item.size if item else None,
        price=price,
    )


def search_products(params: ProductSearchInput, caller: CallerContext) -> ToolResult:
    settings = caller.settings
    token = bearer_token(
        caller.credentials,
        settings.require("KROGER_TOKEN_URL"),
        settings.require("KROGER_CLIENT_ID"),
        settings.require("KROGER_CLIENT_SECRET"),
        session=caller.session,
        timeout=settings.timeout,
    )

    query: Dict[str, Any] = {"filter.term": params.term, "filter.limit": params.limit}
    if params.location_id:
        query["filter.locationId"] = params.location_id
    url = f"{settings.require('KROGER_API_URL').rstrip('/')}/products"
    listing = parse(ProductsResponse, caller.get_json(url, query, headers=bearer(token)), url=url)

    products = [_to_product(product) for product in as_list(listing.data)]
    if not products:
        return ToolResult.failure(
            f"No products found for '{params.term}'.", title="No products found", variant="info"
        )

    ui = render.table(
        [
            ("imageUrl", "", "image"),
            ("description", "Product", "text"),
            ("brand", "Brand", "text"),
            ("size", "Size", "text"),
            ("price", "Price", "currency"),
        ],
        [product.model_dump(by_alias=True) for product in products],
    )
    return ToolResult.success(
        f"Found {len(products)} products matching '{params.term}'.",
        ProductSearchOutput(products=products),
        ui,
    )


TOOL = define({
    "id": "search-products",
    "name": "Search Grocery Products",
    "description": "Searches the Kroger product catalog, optionally priced for one store",
    "input": ProductSearchInput,
    "output": ProductSearchOutput,
    "pricing": {"pricePerUse": 0, "currency": "USD"},
    "handler": search_products,
    "requires": ("KROGER_CLIENT_ID", "KROGER_CLIENT_SECRET"),
    "usage": {"term": "milk", "limit": 5},
    "failure_text": "Sorry, I couldn't search the product catalog right now.",
})
