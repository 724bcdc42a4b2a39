# app/entrypoints/api/routers/properties.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import get_property_provider
from ....schemas import PropertyAttributesOut, PropertyLookupIn, PropertyLookupOut
from ....service_layer.evaluation import PropertyDataProvider, lookup_property

router = APIRouter(tags=["properties"])


@router.post("/properties/lookup", response_model=PropertyLookupOut)
async def property_lookup(
    body: PropertyLookupIn,
    provider: PropertyDataProvider = Depends(get_property_provider),
) -> PropertyLookupOut:
    # Never fails on provider trouble: the partner gets defaults to edit.
    res = await lookup_property(body.address, provider)
    attrs = res.intake.attributes
    return PropertyLookupOut(
        address=res.address,
        owner_names=res.intake.owner_names,
        lookup_ok=res.intake.lookup_ok,
        lookup_error=res.error,
        raw_property_type=res.record.raw_property_type if res.record else None,
        defaults_applied=list(res.intake.defaults_applied),
        attributes=PropertyAttributesOut(
            home_value=attrs.home_value,
            mortgage_balance=attrs.mortgage_balance,
            state=attrs.state,
            property_type=attrs.property_type.value,
            ownership_type=attrs.ownership_type.value,
            ltv=attrs.ltv,
        ),
    )
