"""
Admin configuration for store app
"""
from django.contrib import admin
from .models import Product, Purchase


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Product Admin"""
    list_display = ['name', 'price', 'stock', 'is_available', 'updated_at']
    list_filter = ['is_available']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """Purchases are written by the store service only."""
    list_display = ['student', 'product', 'quantity', 'total_price', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['student__name', 'product__name', 'requirements']
    readonly_fields = ['student', 'product', 'quantity', 'total_price', 'requirements', 'status', 'created_at']
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False
