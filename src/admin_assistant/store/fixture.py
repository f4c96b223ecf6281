"""Built-in demo data for the mock store."""

from admin_assistant.store.models import (
    AnalyticsData,
    CategoryShare,
    MonthlySales,
    Order,
    Product,
    StoreData,
)

MOCK_PRODUCTS: tuple[Product, ...] = (
    Product(
        id=1,
        name="Wireless Headphones Pro",
        price=129.99,
        inventory=45,
        status="active",
        sales=230,
        image="🎧",
        sku="WH-001",
        category="Electronics",
        description=(
            "Experience immersive sound with our top-of-the-line wireless headphones. "
            "Featuring noise cancellation and 20-hour battery life."
        ),
    ),
    Product(
        id=2,
        name="Smart Watch Elite",
        price=299.99,
        inventory=12,
        status="active",
        sales=85,
        image="⌚",
        sku="SW-002",
        category="Wearables",
        description=(
            "Stay connected and track your fitness with this sleek smartwatch. "
            "GPS, heart rate monitor, and customizable watch faces."
        ),
    ),
    Product(
        id=3,
        name="Premium Phone Case",
        price=24.99,
        inventory=0,
        status="out_of_stock",
        sales=1560,
        image="📱",
        sku="PC-003",
        category="Accessories",
        description=(
            "Protect your phone in style with our durable and elegant premium case. "
            "Available in multiple colors."
        ),
    ),
    Product(
        id=4,
        name="Organic Coffee Beans",
        price=18.50,
        inventory=75,
        status="active",
        sales=450,
        image="☕",
        sku="CB-004",
        category="Groceries",
        description=(
            "Start your day right with our ethically sourced, fair-trade organic coffee beans. "
            "Rich aroma and smooth taste."
        ),
    ),
    Product(
        id=5,
        name="Yoga Mat Deluxe",
        price=45.00,
        inventory=30,
        status="active",
        sales=120,
        image="🧘",
        sku="YM-005",
        category="Fitness",
        description=(
            "Enhance your yoga practice with our extra-thick, non-slip deluxe yoga mat. "
            "Eco-friendly materials."
        ),
    ),
)

MOCK_ORDERS: tuple[Order, ...] = (
    Order(
        id="#ORD-12345",
        customer="John Doe",
        total=129.99,
        status="fulfilled",
        date="2025-06-10",
        items=("Wireless Headphones Pro",),
    ),
    Order(
        id="#ORD-12346",
        customer="Jane Smith",
        total=324.98,
        status="pending",
        date="2025-06-11",
        items=("Smart Watch Elite", "Premium Phone Case"),
    ),
    Order(
        id="#ORD-12347",
        customer="Alice Brown",
        total=18.50,
        status="processing",
        date="2025-06-11",
        items=("Organic Coffee Beans",),
    ),
    Order(
        id="#ORD-12348",
        customer="Robert Green",
        total=90.00,
        status="fulfilled",
        date="2025-06-09",
        items=("Yoga Mat Deluxe", "Yoga Mat Deluxe"),
    ),
    Order(
        id="#ORD-12349",
        customer="Emily White",
        total=299.99,
        status="cancelled",
        date="2025-06-08",
        items=("Smart Watch Elite",),
    ),
)

MOCK_ANALYTICS = AnalyticsData(
    today_sales=12450.50,
    today_orders=18,
    conversion_rate=3.2,
    top_product="Premium Phone Case",
    monthly_sales=(
        MonthlySales(name="Jan", sales=4000),
        MonthlySales(name="Feb", sales=3000),
        MonthlySales(name="Mar", sales=5000),
        MonthlySales(name="Apr", sales=4500),
        MonthlySales(name="May", sales=6000),
        MonthlySales(name="Jun", sales=5500),
    ),
    category_distribution=(
        CategoryShare(name="Electronics", value=400),
        CategoryShare(name="Wearables", value=300),
        CategoryShare(name="Accessories", value=200),
        CategoryShare(name="Groceries", value=150),
        CategoryShare(name="Fitness", value=100),
    ),
)


def load_mock_store() -> StoreData:
    """Return a fresh copy of the demo store."""
    return StoreData(products=MOCK_PRODUCTS, orders=MOCK_ORDERS, analytics=MOCK_ANALYTICS)
