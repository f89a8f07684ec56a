"""
Talent store models
"""
from django.db import models
from django.core.validators import MinValueValidator
from students.models import Student


class Product(models.Model):
    """
    Item students buy with talents. Stock only changes through purchases.
    """
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    price = models.IntegerField(validators=[MinValueValidator(0)], help_text='Price in talents')
    stock = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        verbose_name = 'Product'
        verbose_name_plural = 'Products'
        ordering = ['name', 'id']

    def __str__(self):
        return f"{self.name} ({self.price} talents, {self.stock} left)"


class Purchase(models.Model):
    """
    Completed purchase. Written in the same transaction as the stock decrement
    and the student's 'purchase' history row.
    """
    STATUS_COMPLETED = 'completed'

    STATUS_CHOICES = [
        (STATUS_COMPLETED, 'Completed'),
    ]

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name='purchases',
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name='purchases',
    )
    quantity = models.IntegerField(validators=[MinValueValidator(1)])
    total_price = models.IntegerField()
    requirements = models.TextField(blank=True, default='', help_text='Free-text request (size, color, ...)')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_COMPLETED)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'purchases'
        verbose_name = 'Purchase'
        verbose_name_plural = 'Purchases'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.student.name}: {self.product.name} x{self.quantity}"
