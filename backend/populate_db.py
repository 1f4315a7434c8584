import os
import sys
from datetime import datetime
from decimal import Decimal

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

# Database models and setup
from database import SessionLocal, init_db
from models.customer import Customer
from models.inventory import InventoryItem
from models.purchase_order import PurchaseOrder, PurchaseOrderStatus
from models.sales_order import SalesOrder, SalesOrderStatus
from models.supplier import Supplier
from models.users import User
from utils.hashing import get_password_hash

# Configuration
DEMO_PASSWORD = "password123"

USERS = [
    {"email": "admin@example.com", "name": "Admin User"},
    {"email": "manager@example.com", "name": "Manager User"},
]

# (owner email, product name, sku, category, quantity, unit price, reorder level)
INVENTORY = [
    ("admin@example.com", "Widget A", "WID-001", "Electronics", 100, "29.99", 20),
    ("admin@example.com", "Gadget B", "GAD-002", "Electronics", 50, "49.99", 15),
    ("admin@example.com", "Tool C", "TOO-003", "Hardware", 75, "19.99", 25),
    ("manager@example.com", "Component D", "COM-004", "Electronics", 200, "5.99", 50),
    ("manager@example.com", "Material E", "MAT-005", "Raw Materials", 300, "12.50", 100),
]

SUPPLIERS = [
    ("admin@example.com", "Supplier ABC", "orders@supplierabc.com", "Alice Brown"),
    ("admin@example.com", "Supplier XYZ", "orders@supplierxyz.com", "Xavier Young"),
    ("manager@example.com", "Component Corp", "sales@componentcorp.com", "Carl Cole"),
]

CUSTOMERS = [
    ("admin@example.com", "John Doe", "john@example.com", "Retail"),
    ("admin@example.com", "Jane Smith", "jane@example.com", "Wholesale"),
    ("manager@example.com", "Bob Johnson", "bob@example.com", "Retail"),
]

SALES_ORDERS = [
    ("admin@example.com", "SO-2025-001", "John Doe", "john@example.com", "159.97", SalesOrderStatus.PENDING),
    ("admin@example.com", "SO-2025-002", "Jane Smith", "jane@example.com", "89.98", SalesOrderStatus.PROCESSING),
    ("manager@example.com", "SO-2025-003", "Bob Johnson", "bob@example.com", "299.99", SalesOrderStatus.SHIPPED),
]

PURCHASE_ORDERS = [
    ("admin@example.com", "PO-2025-001", "Supplier ABC", "orders@supplierabc.com", "2999.50",
     PurchaseOrderStatus.PENDING, datetime(2025, 8, 25)),
    ("admin@example.com", "PO-2025-002", "Supplier XYZ", "orders@supplierxyz.com", "1499.75",
     PurchaseOrderStatus.APPROVED, datetime(2025, 8, 20)),
    ("manager@example.com", "PO-2025-003", "Component Corp", "sales@componentcorp.com", "899.25",
     PurchaseOrderStatus.RECEIVED, datetime(2025, 8, 15)),
]
# End Configuration


def seed_users(session):
    users = {}
    password_hash = get_password_hash(DEMO_PASSWORD)
    for entry in USERS:
        user = session.query(User).filter(User.email == entry["email"]).first()
        if not user:
            user = User(email=entry["email"], name=entry["name"], password_hash=password_hash)
            session.add(user)
            session.flush()
        users[entry["email"]] = user
    print(f"Users ready: {len(users)}")
    return users


def seed_directories(session, users):
    for owner, name, email, contact in SUPPLIERS:
        user_id = users[owner].id
        if not session.query(Supplier).filter_by(user_id=user_id, name=name).first():
            session.add(Supplier(user_id=user_id, name=name, email=email, contact_person=contact))
    for owner, name, email, company_type in CUSTOMERS:
        user_id = users[owner].id
        if not session.query(Customer).filter_by(user_id=user_id, name=name).first():
            session.add(Customer(user_id=user_id, name=name, email=email, company_type=company_type))
    session.flush()
    print("Suppliers and customers ready")


def seed_inventory(session, users):
    for owner, product_name, sku, category, quantity, price, reorder in INVENTORY:
        user_id = users[owner].id
        if session.query(InventoryItem).filter_by(user_id=user_id, sku=sku).first():
            continue
        session.add(InventoryItem(
            user_id=user_id, product_name=product_name, sku=sku, category=category,
            quantity=quantity, unit_price=Decimal(price), reorder_level=reorder,
        ))
    session.flush()
    print("Inventory ready")


# Header-only demo orders: their totals are the recorded amounts, no stock is moved
def seed_orders(session, users):
    for owner, number, customer_name, email, total, status in SALES_ORDERS:
        user_id = users[owner].id
        if session.query(SalesOrder).filter_by(user_id=user_id, order_number=number).first():
            continue
        customer = session.query(Customer).filter_by(user_id=user_id, name=customer_name).first()
        amount = Decimal(total)
        session.add(SalesOrder(
            user_id=user_id, order_number=number, customer_id=customer.id if customer else None,
            customer_name=customer_name, customer_email=email,
            subtotal=amount, total_amount=amount, status=status,
        ))
    for owner, number, supplier_name, email, total, status, expected in PURCHASE_ORDERS:
        user_id = users[owner].id
        if session.query(PurchaseOrder).filter_by(user_id=user_id, po_number=number).first():
            continue
        supplier = session.query(Supplier).filter_by(user_id=user_id, name=supplier_name).first()
        session.add(PurchaseOrder(
            user_id=user_id, po_number=number, supplier_id=supplier.id if supplier else None,
            supplier_name=supplier_name, supplier_email=email,
            total_amount=Decimal(total), status=status, expected_delivery=expected,
        ))
    print("Orders ready")


def main():
    init_db()
    session = SessionLocal()
    try:
        users = seed_users(session)
        seed_directories(session, users)
        seed_inventory(session, users)
        seed_orders(session, users)
        session.commit()
        print(f"Seeding finished. Log in as admin@example.com / {DEMO_PASSWORD}")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
