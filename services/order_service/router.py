from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from shared.config.database import get_db
from shared.security import CHECKOUT_RATE_LIMIT, limiter, verify_internal_api_key
from .schemas import OrderCreate, OrderDetailResponse, OrderResponse
from .service import OrderService

# Read-back exposes customer details, so it is internal only
router = APIRouter(dependencies=[Depends(verify_internal_api_key)])
public_router = APIRouter()

@public_router.get("/health")
async def health_check():
    return {"service": "order", "status": "running"}

@public_router.post("/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(CHECKOUT_RATE_LIMIT)
async def create_order(
    request: Request,                          # slowapi keys the limit off the client address
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db)
):
    return await OrderService.place_order(db, payload)

@router.get("/orders/{order_id}", response_model=OrderDetailResponse)
async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
    order = await OrderService.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
