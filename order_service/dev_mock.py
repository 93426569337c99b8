# order_service/dev_mock.py
"""
Dev mock user-service i product-service w jednej aplikacji.
Odpowiedzi mają ten sam kształt co prawdziwe serwisy: {"success": ..., "data": ...}.

    uvicorn order_service.dev_mock:app --port 3003
"""
import copy
import threading

from fastapi import Body, FastAPI, HTTPException

USERS = {
    "u1": {"id": "u1", "name": "Alice", "email": "alice@example.com"},
    "u2": {"id": "u2", "name": "Bob", "email": "bob@example.com"},
}

PRODUCTS = {
    "p1": {"id": "p1", "name": "Keyboard", "price": 10, "stock": 5},
    "p2": {"id": "p2", "name": "Mouse", "price": 49.50, "stock": 100},
    "p3": {"id": "p3", "name": "Monitor", "price": 899.00, "stock": 0},
}


def create_app(users: dict | None = None, products: dict | None = None) -> FastAPI:
    app = FastAPI(title="User/Product Service (dev mock)")

    users = copy.deepcopy(USERS if users is None else users)
    products = copy.deepcopy(PRODUCTS if products is None else products)
    stock_lock = threading.Lock()

    @app.get("/users/{user_id}")
    def get_user(user_id: str):
        user = users.get(user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return {"success": True, "data": user}

    @app.get("/products/{product_id}")
    def get_product(product_id: str):
        product = products.get(product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return {"success": True, "data": product}

    @app.patch("/products/{product_id}/stock")
    def update_stock(product_id: str, quantity: int = Body(..., embed=True)):
        # jak prawdziwy product-service: sprawdzenie i odjęcie w jednej operacji
        with stock_lock:
            product = products.get(product_id)
            if not product:
                raise HTTPException(status_code=404, detail="Product not found")
            if product["stock"] < quantity:
                raise HTTPException(status_code=400, detail="Insufficient stock")
            product["stock"] -= quantity
        return {"success": True, "message": "Stock updated successfully", "data": product}

    return app


app = create_app()
