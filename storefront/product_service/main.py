# storefront/product_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Product Service (dev mock)")


PRODUCTS = {
    1: {"id": 1, "name": "Notebook", "price": "10.00"},
    2: {"id": 2, "name": "Backpack", "price": "25.00"},
    3: {"id": 3, "name": "Desk lamp", "price": "39.90"},
    4: {"id": 4, "name": "Headphones", "price": "129.00"},
}


@app.get("/products/{product_id}")
def get_product(product_id: int):
    product = PRODUCTS.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
