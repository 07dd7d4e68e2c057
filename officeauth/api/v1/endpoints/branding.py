"""Public branding lookup used by login and landing pages before sign-in."""

from typing import Annotated

from fastapi import APIRouter, Depends

from officeauth.api.v1.dependencies import get_branding_resolver
from officeauth.application.services import BrandingResolver
from officeauth.schemas.branding import BrandingResponse

router = APIRouter()


@router.get("", response_model=BrandingResponse)
async def resolve_branding(
    resolver: Annotated[BrandingResolver, Depends(get_branding_resolver)],
    office_id: str | None = None,
    slug: str | None = None,
):
    """Resolve branding by office id or subdomain slug; with neither, the platform defaults."""
    if office_id:
        view = await resolver.resolve(office_id)
    elif slug:
        view = await resolver.resolve_by_slug(slug)
    else:
        view = await resolver.resolve(None)
    return BrandingResponse.model_validate(view)
