"""Product URL configuration.

Routes answer with or without a trailing slash: ``/api/products`` and
``/api/products/`` reach the same view.
"""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.products.views import ProductViewSet

router = DefaultRouter(trailing_slash=True)
# The constructor only takes a flag; the pattern itself is set afterwards.
router.trailing_slash = "/?"
router.register("products", ProductViewSet, basename="product")

urlpatterns = router.urls
