from fastapi import APIRouter

from catalog.modules.categories.routes import router as categories_router
from catalog.modules.courses.routes import router as courses_router
from catalog.modules.geo.routes import router as geo_router
from catalog.modules.media.routes import router as media_router
from catalog.modules.users.routes import router as users_router

api_router = APIRouter()
api_router.include_router(categories_router)
api_router.include_router(courses_router)
api_router.include_router(media_router)
api_router.include_router(users_router)
api_router.include_router(geo_router)
