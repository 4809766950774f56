from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException

from ..schemas.widget import ButtonStyle, CachedResult, Product, ProductUpdate, WidgetSettings
from ..security import verify_api_key, widget_session
from ..services.store import WidgetStore, get_store
from ..services.widget_styles import button_style_classes


router = APIRouter(tags=["widget"])


@router.get("/settings", response_model=WidgetSettings)
async def read_settings(store: WidgetStore = Depends(get_store)):
    return store.get_settings()


@router.put("/settings", response_model=WidgetSettings, dependencies=[Depends(verify_api_key)])
async def write_settings(body: WidgetSettings, store: WidgetStore = Depends(get_store)):
    return store.save_settings(body)


@router.get("/settings/button-style", response_model=ButtonStyle)
async def button_style(style: Optional[str] = None, store: WidgetStore = Depends(get_store)):
    # Without an explicit style, describe the one currently saved
    chosen = style or store.get_settings().widgetStyle
    return ButtonStyle(style=chosen, classes=button_style_classes(chosen))


@router.get("/products", response_model=List[Product])
async def read_products(enabled: Optional[bool] = None, store: WidgetStore = Depends(get_store)):
    products = store.get_products()
    if enabled is not None:
        products = [p for p in products if p.enabled == enabled]
    return products


@router.put("/products", response_model=List[Product], dependencies=[Depends(verify_api_key)])
async def write_products(body: List[Product], store: WidgetStore = Depends(get_store)):
    ids = [p.id for p in body]
    if len(ids) != len(set(ids)):
        raise HTTPException(status_code=400, detail="Product ids must be unique")
    return store.save_products(body)


@router.patch("/products/{product_id}", response_model=Product, dependencies=[Depends(verify_api_key)])
async def patch_product(product_id: str, body: ProductUpdate, store: WidgetStore = Depends(get_store)):
    updated = store.update_product(product_id, body.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return updated


@router.get("/results")
async def read_results(session_id: str = Depends(widget_session), store: WidgetStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return store.get_cached_results(session_id)


@router.post("/results")
async def add_result(
    body: CachedResult = Body(...),
    session_id: str = Depends(widget_session),
    store: WidgetStore = Depends(get_store),
) -> Dict[str, Any]:
    return store.save_cached_result(session_id, body.model_dump(exclude_none=True, exclude={"timestamp"}))


@router.delete("/results")
async def clear_results(session_id: str = Depends(widget_session), store: WidgetStore = Depends(get_store)):
    store.clear_cache(session_id)
    return {"ok": True}
