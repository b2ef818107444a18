from fastapi import APIRouter

router = APIRouter()

@router.get("/health")
async def health_check():
    """Basic health check without calling the store"""
    return {
        "status": "ok",
        "service": "billed-api"
    }
