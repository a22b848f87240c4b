"""Проверка работоспособности."""

from fastapi import APIRouter, Response

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health():
    """Сервис запущен и принимает запросы."""
    return Response(status_code=200)
