"""API routes for warehouse lookup and shipping charges."""

from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from ...context import ShippingContext
from ...schemas.shipping import (
    CalculateShippingRequest,
    CompleteShippingResponse,
    NearestWarehouseRequest,
    NearestWarehouseResponse,
    RatesResponse,
    ShippingChargeRequest,
    ShippingChargeResponse,
    TransportBandModel,
)
from ..dependencies import error_response, get_context

logger = logging.getLogger(__name__)

router = APIRouter(tags=["shipping"])

RequestT = TypeVar("RequestT", bound=BaseModel)


def _query_model(model: Type[RequestT], **params: Any) -> RequestT:
    """Validate query parameters with the same model the POST body uses."""
    try:
        return model(**{key: value for key, value in params.items() if value is not None})
    except ValidationError as exc:
        raise RequestValidationError(
            [{**error, "loc": ("query", *error["loc"])} for error in exc.errors()]
        ) from exc


def _nearest_warehouse(payload: NearestWarehouseRequest, context: ShippingContext):
    service = context.service
    outcome = service.attempt(service.find_nearest_warehouse, payload.sellerId)
    if not outcome.ok:
        return error_response(outcome.error)
    return NearestWarehouseResponse.from_result(outcome.value)


def _shipping_charge(payload: ShippingChargeRequest, context: ShippingContext):
    service = context.service
    outcome = service.attempt(
        service.calculate_shipping_charge,
        payload.warehouseId,
        payload.customerId,
        payload.deliverySpeed,
        payload.productId,
    )
    if not outcome.ok:
        return error_response(outcome.error)
    return ShippingChargeResponse.from_result(outcome.value)


@router.get("/warehouse/nearest", response_model=NearestWarehouseResponse, status_code=status.HTTP_200_OK)
def get_nearest_warehouse(
    sellerId: Optional[str] = Query(default=None, description="Seller UUID."),
    context: ShippingContext = Depends(get_context),
):
    """Find the active warehouse closest to a seller."""
    return _nearest_warehouse(_query_model(NearestWarehouseRequest, sellerId=sellerId), context)


@router.post("/warehouse/nearest", response_model=NearestWarehouseResponse, status_code=status.HTTP_200_OK)
def post_nearest_warehouse(
    payload: NearestWarehouseRequest,
    context: ShippingContext = Depends(get_context),
):
    return _nearest_warehouse(payload, context)


@router.get("/shipping-charge", response_model=ShippingChargeResponse, status_code=status.HTTP_200_OK)
def get_shipping_charge(
    warehouseId: Optional[str] = Query(default=None),
    customerId: Optional[str] = Query(default=None),
    deliverySpeed: Optional[str] = Query(default=None, description="standard (default) or express."),
    productId: Optional[str] = Query(default=None, description="Optional product; 1 kg when omitted."),
    context: ShippingContext = Depends(get_context),
):
    """Charge for shipping from a given warehouse to a customer."""
    payload = _query_model(
        ShippingChargeRequest,
        warehouseId=warehouseId,
        customerId=customerId,
        deliverySpeed=deliverySpeed,
        productId=productId,
    )
    return _shipping_charge(payload, context)


@router.post("/shipping-charge", response_model=ShippingChargeResponse, status_code=status.HTTP_200_OK)
def post_shipping_charge(
    payload: ShippingChargeRequest,
    context: ShippingContext = Depends(get_context),
):
    return _shipping_charge(payload, context)


@router.post(
    "/shipping-charge/calculate",
    response_model=CompleteShippingResponse,
    status_code=status.HTTP_200_OK,
)
def calculate_shipping(
    payload: CalculateShippingRequest,
    context: ShippingContext = Depends(get_context),
):
    """Seller to customer charge, routed through the seller's nearest warehouse.

    Combines the nearest warehouse lookup with the charge calculation. POST only.
    """
    service = context.service
    outcome = service.attempt(
        service.calculate_complete_shipping,
        payload.sellerId,
        payload.customerId,
        payload.deliverySpeed,
        payload.productId,
    )
    if not outcome.ok:
        return error_response(outcome.error)

    result = outcome.value
    logger.info(
        f"Complete shipping: seller {payload.sellerId} -> {result.nearest_warehouse.warehouse_name} -> "
        f"customer {payload.customerId}: {result.shipping_charge} ({result.transport_mode}, {result.distance_km} km)"
    )
    return CompleteShippingResponse.from_result(result)


@router.get("/rates", response_model=RatesResponse, status_code=status.HTTP_200_OK)
def list_rates(context: ShippingContext = Depends(get_context)) -> RatesResponse:
    """Transport bands used for pricing, shortest distances first."""
    service = context.service
    return RatesResponse(
        bands=[TransportBandModel.from_band(band) for band in service.selector.bands],
        defaultWeightKg=service.default_weight_kg,
    )
