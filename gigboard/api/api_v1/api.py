from fastapi import APIRouter
from gigboard.api.api_v1.endpoints import auth, availability, events, musicians

router = APIRouter()

# Include all routers
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(musicians.router, prefix="/musicians", tags=["Musicians"])
router.include_router(availability.router, prefix="/availability", tags=["Availability"])
router.include_router(events.router, prefix="/events", tags=["Events"])
