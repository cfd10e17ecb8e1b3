"""Menu URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.menu.views import MenuItemViewSet, MenuVariantViewSet

router = DefaultRouter(trailing_slash=True)
router.register("menu/items", MenuItemViewSet, basename="menu-item")
router.register("menu/variants", MenuVariantViewSet, basename="menu-variant")

urlpatterns = router.urls
