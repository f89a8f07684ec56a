"""
Store URLs
"""
from django.urls import path
from . import views

app_name = 'store'

urlpatterns = [
    path('products', views.product_list_view, name='products'),
    path('products/<int:product_id>/purchase', views.product_purchase_view, name='purchase'),
]
