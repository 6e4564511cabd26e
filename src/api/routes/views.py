from typing import Optional

from fastapi import APIRouter, Depends, status

from src.app.use_cases.auth import UserInfo, ViewerData, ViewerResponse
from src.depends import get_optional_user

router = APIRouter(tags=["Views"])


@router.get("/session", status_code=status.HTTP_200_OK, response_model=ViewerResponse)
async def get_session_viewer(viewer: Optional[UserInfo] = Depends(get_optional_user)):
    """
    Viewer of the rendered site

    Never rejects: visitors without a usable session cookie are anonymous.
    """
    return ViewerResponse(data=ViewerData(user=viewer))
