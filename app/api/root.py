"""Service root."""

from robyn import Request

from app.core.router import Router
from app.core.settings import settings as st

router = Router(__file__)


@router.get("/")
async def say_hello(request: Request) -> str:
    return st.GREETING
