"""Invoice Line Endpoints — add, update, remove through the full FastAPI stack.

Invariants:
    - Every line route answers 200 with the full updated invoice
    - Unknown line id and last-line removal → 400 with the aggregate's message
    - Unknown invoice id → 404
    - Totals always reflect the current lines
"""

from uuid import uuid4


def _lines_url(invoice_id, line_id=None):
    url = f"/api/v1/invoices/{invoice_id}/lines"
    return f"{url}/{line_id}" if line_id else url


async def test_add_line_returns_200_with_new_total(client, created_invoice):
    res = await client.post(
        _lines_url(created_invoice["id"]),
        json={"description": "Support", "quantity": 2, "unitPrice": 50},
    )
    assert res.status_code == 200
    data = res.json()
    assert len(data["lines"]) == 2
    assert data["total"] == "200"


async def test_add_line_with_zero_quantity_returns_400(client, created_invoice):
    res = await client.post(
        _lines_url(created_invoice["id"]),
        json={"description": "Support", "quantity": 0, "unitPrice": 20},
    )
    assert res.status_code == 400
    assert "Quantity must be greater than 0" in res.text


async def test_add_line_with_negative_price_returns_400(client, created_invoice):
    res = await client.post(
        _lines_url(created_invoice["id"]),
        json={"description": "Support", "quantity": 1, "unitPrice": -1},
    )
    assert res.status_code == 400
    assert "Unit price must be greater than or equal to 0" in res.text


async def test_add_line_with_empty_description_returns_400(client, created_invoice):
    res = await client.post(
        _lines_url(created_invoice["id"]),
        json={"description": "", "quantity": 1, "unitPrice": 1},
    )
    assert res.status_code == 400
    assert "Description is required" in res.text


async def test_add_line_to_unknown_invoice_returns_404(client):
    res = await client.post(
        _lines_url(uuid4()),
        json={"description": "Support", "quantity": 1, "unitPrice": 1},
    )
    assert res.status_code == 404


async def test_update_line(client, created_invoice):
    line_id = created_invoice["lines"][0]["id"]
    res = await client.put(
        _lines_url(created_invoice["id"], line_id),
        json={"description": "Consulting (senior)", "quantity": 10, "unitPrice": 15},
    )
    assert res.status_code == 200
    line = res.json()["lines"][0]
    assert line["id"] == line_id
    assert line["description"] == "Consulting (senior)"
    assert line["lineTotal"] == "150"


async def test_update_line_with_empty_description_returns_400(client, created_invoice):
    line_id = created_invoice["lines"][0]["id"]
    res = await client.put(
        _lines_url(created_invoice["id"], line_id),
        json={"description": "", "quantity": 1, "unitPrice": 1},
    )
    assert res.status_code == 400
    assert "Description is required" in res.text


async def test_update_unknown_line_returns_400(client, created_invoice):
    res = await client.put(
        _lines_url(created_invoice["id"], uuid4()),
        json={"description": "X", "quantity": 1, "unitPrice": 1},
    )
    assert res.status_code == 400
    assert "Invoice line with ID" in res.text
    assert "not found" in res.text


async def test_remove_last_line_returns_400(client, created_invoice):
    line_id = created_invoice["lines"][0]["id"]
    res = await client.delete(_lines_url(created_invoice["id"], line_id))
    assert res.status_code == 400
    assert res.json()["error"]["message"] == (
        "Cannot remove the last invoice line. Invoice must have at least one line."
    )


async def test_remove_unknown_line_returns_400(client, created_invoice):
    res = await client.delete(_lines_url(created_invoice["id"], uuid4()))
    assert res.status_code == 400
    assert "not found" in res.text


async def test_multiple_operations_keep_total_consistent(client, created_invoice):
    invoice_id = created_invoice["id"]
    await client.post(
        _lines_url(invoice_id),
        json={"description": "Support", "quantity": 5, "unitPrice": 20},
    )
    await client.post(
        _lines_url(invoice_id),
        json={"description": "Travel", "quantity": 1, "unitPrice": 50},
    )
    res = await client.post(
        _lines_url(invoice_id),
        json={"description": "Discarded", "quantity": 3, "unitPrice": 10},
    )
    lines = res.json()["lines"]

    await client.put(
        _lines_url(invoice_id, lines[1]["id"]),
        json={"description": "Support", "quantity": 5, "unitPrice": 15},
    )
    res = await client.delete(_lines_url(invoice_id, lines[3]["id"]))
    assert res.status_code == 200

    res = await client.get(f"/api/v1/invoices/{invoice_id}")
    data = res.json()
    assert data["total"] == "225"
    assert [line["description"] for line in data["lines"]] == [
        "Consulting", "Support", "Travel",
    ]


async def test_add_line_with_quantity_below_stored_precision_returns_400(
    client, created_invoice,
):
    res = await client.post(
        _lines_url(created_invoice["id"]),
        json={"description": "Sample", "quantity": "0.00001", "unitPrice": "1"},
    )
    assert res.status_code == 400
    assert "Quantity cannot have more than 4 decimal places." in res.text

    res = await client.get(f"/api/v1/invoices/{created_invoice['id']}")
    assert len(res.json()["lines"]) == 1


async def test_update_line_with_oversized_unit_price_returns_400(client, created_invoice):
    line_id = created_invoice["lines"][0]["id"]
    res = await client.put(
        _lines_url(created_invoice["id"], line_id),
        json={"description": "Consulting", "quantity": 1, "unitPrice": "1" + "0" * 14},
    )
    assert res.status_code == 400
    assert "Unit price cannot have more than 14 integer digits." in res.text


async def test_four_decimal_quantity_survives_reload(client, created_invoice):
    res = await client.post(
        _lines_url(created_invoice["id"]),
        json={"description": "Metered", "quantity": "0.0001", "unitPrice": "3"},
    )
    assert res.status_code == 200
    res = await client.get(f"/api/v1/invoices/{created_invoice['id']}")
    metered = res.json()["lines"][1]
    assert metered["quantity"] == "0.0001"
    assert metered["lineTotal"] == "0.0003"
