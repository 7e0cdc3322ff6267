import os

from fastapi.testclient import TestClient

from assertgen.main import app

client = TestClient(app)

SHOP = """
package shop;

import java.util.List;

public class Item implements Comparable<Item> {
    private String label;
    public String getLabel() { return label; }
    public boolean isAvailable() { return true; }
    public List<String> getTags() { return null; }
    public int compareTo(Item other) { return 0; }
}

public class Book extends Item {
    public String getAuthor() { return null; }
}
"""


def test_health():
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_catalog():
    res = client.post("/catalog", json={"code": SHOP, "filename": "Shop.java"})

    assert res.status_code == 200
    nodes = {n["id"]: n for n in res.json()["nodes"]}
    assert nodes["type:shop.Item"]["attrs"]["source_file"] == "Shop.java"
    assert any(e["type"] == "INHERITS" and e["src"] == "type:shop.Book" for e in res.json()["edges"])


def test_flat_assertion():
    res = client.post("/assertions/flat", json={"code": SHOP, "class_name": "shop.Item"})

    assert res.status_code == 200
    body = res.json()
    assert body["assert_class_name"] == "ItemAssert"
    assert "public class ItemAssert extends AbstractComparableAssert<ItemAssert, Item> {" in body["content"]
    assert "public ItemAssert isAvailable() {" in body["content"]
    assert "public ItemAssert hasTags(String... tags) {" in body["content"]


def test_flat_assertion_from_files(data_dir):
    player = os.path.join(data_dir, "org", "example", "data", "Player.java")
    res = client.post("/assertions/flat", json={
        "files": [player], "class_name": "org.example.data.Player", "package": "my.assertions",
    })

    assert res.status_code == 200
    assert res.json()["content"].startswith("package my.assertions;\n")


def test_hierarchical_assertions():
    res = client.post("/assertions/hierarchical", json={"code": SHOP, "class_names": ["shop"]})

    assert res.status_code == 200
    units = {u["class_name"]: u for u in res.json()["units"]}
    assert sorted(units) == ["shop.Book", "shop.Item"]
    assert "extends AbstractItemAssert<S, A> {" in units["shop.Book"]["abstract_content"]
    assert "public class BookAssert extends AbstractBookAssert<BookAssert, Book> {" in \
        units["shop.Book"]["concrete_content"]


def test_entry_point():
    res = client.post("/assertions/entry-point", json={
        "code": SHOP, "class_names": ["shop"], "entry_point_type": "soft",
    })

    assert res.status_code == 200
    body = res.json()
    assert body["file_name"] == "SoftAssertions.java"
    assert body["content"].startswith("package shop;\n")
    assert "public shop.BookAssert assertThat(shop.Book actual) {" in body["content"]


def test_unknown_entry_point_type():
    res = client.post("/assertions/entry-point", json={
        "code": SHOP, "class_names": ["shop"], "entry_point_type": "fluent",
    })

    assert res.status_code == 400
    assert "Unknown entry point type" in res.json()["detail"]


def test_unknown_class():
    res = client.post("/assertions/flat", json={"code": SHOP, "class_name": "shop.Nope"})

    assert res.status_code == 400
    assert "shop.Nope" in res.json()["detail"]


def test_missing_code():
    res = client.post("/assertions/flat", json={"class_name": "shop.Item"})

    assert res.status_code == 400
    assert res.json()["detail"] == "Either code or files is required"


def test_syntax_error():
    res = client.post("/assertions/flat", json={"code": "public class {", "class_name": "Broken"})

    assert res.status_code == 400
    assert res.json()["detail"].startswith("Java syntax error")


def test_invalid_package():
    res = client.post("/assertions/flat", json={"code": SHOP, "class_name": "shop.Item", "package": " x"})

    assert res.status_code == 400
    assert res.json()["detail"].startswith("The given package")
