import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from catalog_api.api.dependencies import SettingsDep, get_product_service
from catalog_api.domain.models import ProductInfo, ProductRead
from catalog_api.domain.ports import ProductNotFoundError, ProductServiceError
from catalog_api.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])

ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]


@router.get("/", response_model=list[ProductRead])
async def list_products(
    service: ProductServiceDep,
    settings: SettingsDep,
    search_term: str | None = None,
    page: int = 0,
    page_size: int | None = None,
) -> list[ProductRead]:
    """
    Lists products, optionally filtered by a case-insensitive name search.
    """
    size = page_size if page_size is not None else settings.default_page_size
    try:
        products = await service.get_products(search_term, page, size)
    except ProductServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [ProductRead.from_domain(p) for p in products]


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    service: ProductServiceDep,
    product_id: uuid.UUID,
) -> ProductRead:
    try:
        product = await service.get_product_by_id(product_id)
    except ProductServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if product is None:
        logger.warning("Product %s requested but does not exist", product_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")
    return ProductRead.from_domain(product)


@router.post("/", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    service: ProductServiceDep,
    payload: ProductInfo,
) -> ProductRead:
    try:
        product = await service.create_product(payload.to_product())
    except ProductServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ProductRead.from_domain(product)


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    service: ProductServiceDep,
    product_id: uuid.UUID,
    payload: ProductInfo,
) -> ProductRead:
    """
    Replaces name, description and price of an existing product.
    """
    product = payload.to_product(product_id)
    try:
        await service.update_product(product)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ProductServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ProductRead.from_domain(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    service: ProductServiceDep,
    product_id: uuid.UUID,
) -> None:
    try:
        await service.delete_product(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ProductServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
