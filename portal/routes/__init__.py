"""
HTTP routes for the portal API.
"""

from fastapi import APIRouter

from portal.routes import account, admin, public, staff

router = APIRouter()
router.include_router(public.router)
router.include_router(account.router)
router.include_router(staff.router)
router.include_router(admin.router)
