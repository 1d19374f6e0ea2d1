"""Return-redirect endpoints for payment providers."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from storefront.api.deps import get_payment_context
from storefront.services.callback_service import CallbackContext
from storefront.services.payment_context import PaymentContext

router = APIRouter()


@router.get("/{method}", status_code=status.HTTP_303_SEE_OTHER)
async def payment_callback(
    method: str,
    request: Request,
    context: Annotated[PaymentContext, Depends(get_payment_context)],
) -> RedirectResponse:
    """Resolve a provider redirect and send the browser to its outcome."""
    resolver = context.callback_resolver()
    outcome = await resolver.run(
        CallbackContext(method=method, params=dict(request.query_params))
    )
    return RedirectResponse(outcome.target, status_code=status.HTTP_303_SEE_OTHER)
