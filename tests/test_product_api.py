from decimal import Decimal

import pytest
import pytest_asyncio
from fastapi import status

from .conftest import BaseIntegrationTest
from .factories import product_factory


class TestProductAPI(BaseIntegrationTest):
    """Integration tests for Product API endpoints"""

    @pytest_asyncio.fixture
    async def catalogue(self, seeded_products):
        return seeded_products

    @pytest.mark.asyncio
    async def test_filter_and_page(self, client, catalogue):
        response = await client.get(
            "/products/", params={"category": "Books", "min_price": "10", "max_price": "50", "page": 2, "page_size": 5}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        matching = sorted(r["id"] for r in catalogue if r["category"] == "Books" and 10 <= r["price"] <= 50)
        assert [p["id"] for p in data["products"]] == matching[5:10]
        assert data["total_filtered_count"] == 12
        assert data["total_count"] == len(catalogue)
        assert data["total_pages"] == 3

    @pytest.mark.asyncio
    async def test_no_filters_returns_everything_counted(self, client, catalogue):
        response = await client.get("/products/")

        data = response.json()
        assert data["total_filtered_count"] == data["total_count"] == len(catalogue)
        assert len(data["products"]) == 10

    @pytest.mark.asyncio
    async def test_invalid_page_is_bad_request(self, client, catalogue):
        response = await client.get("/products/", params={"page": 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["kind"] == "InvalidPageRequestError"

    @pytest.mark.asyncio
    async def test_page_size_over_limit_is_bad_request(self, client, catalogue):
        response = await client.get("/products/", params={"page_size": 1000})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_search(self, client, catalogue):
        response = await client.get("/products/search", params={"search_term": "hammer"})

        assert response.status_code == status.HTTP_200_OK
        names = [p["name"] for p in response.json()["products"]]
        assert names and all(name.startswith("Hammer") for name in names)

    @pytest.mark.asyncio
    async def test_blank_search_is_bad_request(self, client, catalogue):
        response = await client.get("/products/search", params={"search_term": "  "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_category_lookup_ignores_case(self, client, catalogue):
        response = await client.get("/products/category/games")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_filtered_count"] == 1
        assert data["products"][0]["category"] == "Games"

    @pytest.mark.asyncio
    async def test_get_product(self, client, catalogue):
        expected = catalogue[0]

        response = await client.get(f"/products/{expected['id']}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == expected["name"]
        assert Decimal(data["price"]) == expected["price"]

    @pytest.mark.asyncio
    async def test_get_missing_product(self, client, catalogue):
        response = await client.get("/products/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Product with id 99999 not found"

    @pytest.mark.asyncio
    async def test_get_product_with_id_beyond_key_range(self, client, catalogue):
        response = await client.get(f"/products/{2**63}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_page_beyond_store_range_is_bad_request(self, client, catalogue):
        response = await client.get("/products/", params={"page": 2**62, "page_size": 10})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["kind"] == "InvalidPageRequestError"

    @pytest.mark.asyncio
    async def test_create_product(self, client):
        response = await client.post("/products/", json=product_factory.create_product_data())

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["id"] is not None
        assert data["is_active"] is True
        assert data["created_date"]
        assert Decimal(data["price"]) == Decimal("9.99")

        fetched = await client.get(f"/products/{data['id']}")
        assert fetched.json() == data

    @pytest.mark.asyncio
    async def test_create_product_with_bad_price(self, client):
        response = await client.post("/products/", json=product_factory.create_product_data(price="-1"))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
