"""
Default storefront catalog and checkout constants.
Admin overrides are merged onto these records at read time.
"""

from __future__ import annotations

WHATSAPP_NUMBER = "5571987922212"
WHATSAPP_API_URL = f"https://wa.me/{WHATSAPP_NUMBER}"

# Shown in the order message when the customer pays with PIX in advance. Empty hides it.
PIX_KEY = ""

MIN_ORDER_QUANTITY = 1
MAX_ORDER_QUANTITY = 100
DEFAULT_ORDER_QUANTITY = 12

PRODUCTS = [
    {
        "id": "empada-frango",
        "name": "Empada de Frango",
        "description": "Empada tradicional recheada com frango desfiado e tempero caseiro",
        "price": 10,
        "image": "/images/products/empada-frango.jpg",
        "category": "classic",
        "availability": "available",
    },
    {
        "id": "empada-palmito",
        "name": "Empada de Palmito",
        "description": "Empada delicada com palmito fresco e cream cheese",
        "price": 10,
        "image": "/images/products/empada-palmito.jpg",
        "category": "premium",
        "availability": "available",
    },
    {
        "id": "empada-camarao",
        "name": "Empada de Camarão",
        "description": "Empada sofisticada com camarão fresco e tempero especial",
        "price": 10,
        "image": "/images/products/empada-camarao.jpg",
        "category": "premium",
        "availability": "available",
    },
    {
        "id": "empada-queijo",
        "name": "Empada de Queijo",
        "description": "Empada com queijo meia cura e ervas finas",
        "price": 10,
        "image": "/images/products/empada-queijo.jpg",
        "category": "classic",
        "availability": "available",
    },
    {
        "id": "empada-cogumelo",
        "name": "Empada de Cogumelo",
        "description": "Empada vegetariana com cogumelo fresco e alho",
        "price": 10,
        "image": "/images/products/empada-cogumelo.jpg",
        "category": "vegetarian",
        "availability": "available",
    },
    {
        "id": "empada-carne",
        "name": "Empada de Carne Seca",
        "description": "Empada com carne seca desfiada e cebola caramelizada",
        "price": 10,
        "image": "/images/products/empada-carne.jpg",
        "category": "classic",
        "availability": "available",
    },
]

PRODUCT_CATEGORIES = [
    {"id": "all", "name": "Todos os Sabores"},
    {"id": "classic", "name": "Clássicas"},
    {"id": "premium", "name": "Premium"},
    {"id": "vegetarian", "name": "Vegetarianas"},
]

# Fallback label when a transaction references a category that no longer exists.
UNCATEGORIZED_LABEL = "Sem categoria"
