from django.urls import path

from .views import AccountDetailView, AccountListView, AccountOrdersView, OrderDetailView, OrderListView

urlpatterns = [
    path("accounts/", AccountListView.as_view(), name="account-list"),
    path("accounts/<int:pk>/", AccountDetailView.as_view(), name="account-detail"),
    path("accounts/<int:pk>/orders/", AccountOrdersView.as_view(), name="account-orders"),
    path("orders/", OrderListView.as_view(), name="order-list"),
    path("orders/<int:pk>/", OrderDetailView.as_view(), name="order-detail"),
]
