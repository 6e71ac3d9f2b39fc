"""First-run dataset: default menu, tables and staff accounts.

Written to the record store and loaded into memory when the corresponding
collection is empty at startup.
"""

from decimal import Decimal
from typing import List

from app.models.enums import ItemCategory, StaffRole, StaffStatus, TableStatus
from app.schemas.menu import MenuItem
from app.schemas.staff import Staff
from app.schemas.tables import Table

_IMG = "https://images.unsplash.com/{}?q=80&w=1000&auto=format&fit=crop"

# (id, name, description, price, category, image, stock, unit, cost_price)
_SELLABLE = [
    ("a0eebc99-9c0b-4ef8-bb6d-6bb9bd380a11", "Pepperoni Pizza",
     "Classic cheese pizza topped with spicy pepperoni slices and fresh basil.",
     "250.00", ItemCategory.FOOD, "photo-1628840042765-356cda07504e", 20, "Large Box", "120.00"),
    ("b1eebc99-9c0b-4ef8-bb6d-6bb9bd380a22", "Jollof Rice & Chicken",
     "Smoky party jollof rice served with seasoned fried chicken and coleslaw.",
     "150.00", ItemCategory.FOOD, "photo-1604329760661-e71dc83f8f26", 50, "Plate", "65.00"),
    ("c2eebc99-9c0b-4ef8-bb6d-6bb9bd380a33", "White Rice & Stew",
     "Steamed white rice served with savory red tomato stew and beef.",
     "100.00", ItemCategory.FOOD, "photo-1596797038530-2c107229654b", 40, "Plate", "45.00"),
    ("d3eebc99-9c0b-4ef8-bb6d-6bb9bd380a44", "Spring Rolls",
     "Golden crispy pastry rolls filled with vegetables and minced meat.",
     "60.00", ItemCategory.FOOD, "photo-1544025162-d76690b6d029", 100, "Portion (3pcs)", "20.00"),
    ("e4eebc99-9c0b-4ef8-bb6d-6bb9bd380a55", "Greek Salad",
     "Fresh cucumbers, cherry tomatoes, feta cheese, and olives.",
     "80.00", ItemCategory.FOOD, "photo-1540189549336-e6e99c3679fe", 25, "Bowl", "35.00"),
    ("f5eebc99-9c0b-4ef8-bb6d-6bb9bd380a66", "Club Sandwich",
     "Triple-decker toasted sandwich with chicken, bacon, lettuce, and fries.",
     "110.00", ItemCategory.FOOD, "photo-1528735602780-2552fd46c7af", 30, "Pack", "50.00"),
    ("g6eebc99-9c0b-4ef8-bb6d-6bb9bd380a77", "Fruit Parfait",
     "Fresh seasonal berries and fruits topped with creamy yogurt.",
     "75.00", ItemCategory.DESSERT, "photo-1488477181946-6428a0291777", 20, "Cup", "30.00"),
    ("h7eebc99-9c0b-4ef8-bb6d-6bb9bd380a88", "Goat Meat Pepper Soup",
     "Traditional hot and spicy broth with tender goat meat cuts.",
     "130.00", ItemCategory.FOOD, "photo-1543339308-43e59d6b73a6", 15, "Bowl", "70.00"),
    ("i8eebc99-9c0b-4ef8-bb6d-6bb9bd380a99", "Beef Suya",
     "Spicy grilled beef skewers served with sliced onions and dried pepper.",
     "100.00", ItemCategory.FOOD, "photo-1603360946369-dc9bb6258143", 40, "Portion", "55.00"),
    ("j9eebc99-9c0b-4ef8-bb6d-6bb9bd380b00", "Fried Rice Special",
     "Rich stir-fried rice with mixed vegetables, shrimp, and liver.",
     "120.00", ItemCategory.FOOD, "photo-1603133872878-684f108fd1f2", 45, "Plate", "60.00"),
    ("k0eebc99-9c0b-4ef8-bb6d-6bb9bd380b11", "Spicy Chicken Wings",
     "Grilled chicken wings tossed in a hot and tangy pepper sauce.",
     "90.00", ItemCategory.FOOD, "photo-1567620832903-9fc6debc209f", 60, "Basket (6pcs)", "40.00"),
    ("l1eebc99-9c0b-4ef8-bb6d-6bb9bd380b22", "Tea & Biscuits",
     "Hot creamy milk tea served with a side of crunchy biscuits.",
     "45.00", ItemCategory.SOFT_DRINK, "photo-1578859942637-2591636c7a6e", 100, "Cup", "15.00"),
    ("m2eebc99-9c0b-4ef8-bb6d-6bb9bd380b33", "Kebab Skewers",
     "Seasoned meatballs and vegetables grilled on a skewer.",
     "95.00", ItemCategory.FOOD, "photo-1529042410759-befb1204b468", 30, "Stick", "45.00"),
    ("n3eebc99-9c0b-4ef8-bb6d-6bb9bd380b44", "Pounded Yam & Egusi",
     "Soft pounded yam served with rich melon soup and assorted meat.",
     "180.00", ItemCategory.FOOD, "photo-1643656113645-31c379f64267", 20, "Bowl", "90.00"),
    ("o4eebc99-9c0b-4ef8-bb6d-6bb9bd380b55", "Grilled Fish",
     "Whole grilled tilapia served with roasted plantain and pepper sauce.",
     "220.00", ItemCategory.FOOD, "photo-1534939561126-855f86b12801", 10, "Whole", "130.00"),
    ("p5eebc99-9c0b-4ef8-bb6d-6bb9bd380b66", "Crispy Chicken Burger",
     "Crunchy fried chicken breast in a brioche bun with fresh lettuce.",
     "120.00", ItemCategory.FOOD, "photo-1615297928064-24977384d0f9", 40, "Piece", "65.00"),
    ("q6eebc99-9c0b-4ef8-bb6d-6bb9bd380b77", "Seafood Okra",
     "Fresh chopped okra soup loaded with crabs, fish, and prawns.",
     "190.00", ItemCategory.FOOD, "photo-1604152135912-04a022e23696", 15, "Bowl", "100.00"),
]

# Inventory-only stock, no selling price
# (id, name, description, cost_price, image, stock, unit, supplier)
_ESSENTIALS = [
    ("r7eebc99-9c0b-4ef8-bb6d-6bb9bd380b88", "Rice (50kg Bag)", "Premium Long Grain Jasmine Rice",
     "850.00", "photo-1586201375761-83865001e31c", 10, "Bag (50kg)", "Global Grains Ltd"),
    ("s8eebc99-9c0b-4ef8-bb6d-6bb9bd380b99", "Vegetable Oil (25L)", "Pure refined vegetable cooking oil",
     "450.00", "photo-1474979266404-7eaacbcd87c5", 5, "Jerrycan (25L)", "Oils & More"),
    ("t9eebc99-9c0b-4ef8-bb6d-6bb9bd380c00", "Frozen Chicken Carton", "10kg Imported Frozen Chicken Backs",
     "320.00", "photo-1615486367564-b58cb69668d2", 12, "Carton (10kg)", "Cold Chain Logistics"),
]

DEFAULT_TABLE_COUNT = 12


def default_menu() -> List[MenuItem]:
    items = [
        MenuItem(
            id=item_id, name=name, description=description, price=Decimal(price),
            category=category, image=_IMG.format(photo), stock=stock, is_available=True,
            unit=unit, cost_price=Decimal(cost),
        )
        for item_id, name, description, price, category, photo, stock, unit, cost in _SELLABLE
    ]
    items.extend(
        MenuItem(
            id=item_id, name=name, description=description, price=Decimal("0"),
            category=ItemCategory.COOKING_ESSENTIAL, image=_IMG.format(photo), stock=stock,
            is_available=True, unit=unit, cost_price=Decimal(cost), supplier=supplier,
        )
        for item_id, name, description, cost, photo, stock, unit, supplier in _ESSENTIALS
    )
    return items


def default_tables() -> List[Table]:
    """Tables t-1..t-12; odd-numbered tables seat four, even-numbered seat two."""
    return [
        Table(
            id=f"t-{n}",
            label=f"Table {n}",
            seats=4 if n % 2 == 1 else 2,
            status=TableStatus.AVAILABLE,
        )
        for n in range(1, DEFAULT_TABLE_COUNT + 1)
    ]


def default_staff() -> List[Staff]:
    return [
        Staff(id="s1", name="John Doe", role=StaffRole.MANAGER, status=StaffStatus.ACTIVE,
              passcode="1234", email="john@familyworld.com", phone="0200000001"),
        Staff(id="admin", name="Super Admin", role=StaffRole.ADMIN, status=StaffStatus.ACTIVE,
              passcode="0000", email="admin@familyworld.com", phone="0200000000"),
        Staff(id="s2", name="Jane Smith", role=StaffRole.CHEF, status=StaffStatus.ACTIVE,
              passcode="1111", email="jane@familyworld.com", phone="0200000002"),
        Staff(id="s3", name="Mike Johnson", role=StaffRole.WAITER, status=StaffStatus.ACTIVE,
              passcode="2222", email="mike@familyworld.com", phone="0200000003"),
    ]
