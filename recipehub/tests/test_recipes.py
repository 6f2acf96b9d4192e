import logging

from fastapi.testclient import TestClient

from recipehub.app import create_app
from recipehub.catalog.config import CatalogConfig
from recipehub.catalog.models import RecipeCreate
from recipehub.catalog.store import CatalogStore

client = TestClient(create_app())

NEW_RECIPE = {
    "title": "Meeting Notes Summarizer",
    "description": "Summarize meeting transcripts into action items.",
    "tags": ["personal-productivity", "summarization"],
    "github_url": "https://github.com/example/meeting-notes",
    "toolstack": ["OpenAI", "Notion"],
    "difficulty": "Intermediate",
    "category": "Productivity",
}


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_list_recipes_returns_seed_catalog():
    resp = client.get("/api/recipes")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) >= 6
    assert body[0]["title"] == "AI Task Scheduler"
    assert body[0]["rating"] == 48


def test_list_recipes_sorted_by_popularity():
    resp = client.get("/api/recipes", params={"sort_by": "popularity"})
    downloads = [r["downloads"] for r in resp.json()]
    assert downloads == sorted(downloads, reverse=True)


def test_list_recipes_rejects_unknown_sort():
    resp = client.get("/api/recipes", params={"sort_by": "newest"})
    assert resp.status_code == 400


def test_get_recipe_by_id():
    resp = client.get("/api/recipes/3")
    assert resp.status_code == 200
    assert resp.json()["title"] == "Code Review Assistant"


def test_get_recipe_not_found():
    resp = client.get("/api/recipes/9999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Recipe not found"


def test_get_recipe_non_integer_id_is_not_found():
    for bad_id in ("abc", "-1", "1.5"):
        resp = client.get(f"/api/recipes/{bad_id}")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Recipe not found"


def test_search_recipes_covers_tools():
    resp = client.get("/api/recipes/search/zapier")
    assert resp.status_code == 200
    titles = [r["title"] for r in resp.json()]
    assert titles == ["Content Calendar AI"]


def test_recipes_by_category():
    resp = client.get("/api/recipes/category/sales")
    assert [r["title"] for r in resp.json()] == ["Smart Lead Qualifier"]


def test_filter_and_combination():
    resp = client.post(
        "/api/recipes/filter",
        json={"category": "Sales", "difficulty": "Intermediate"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert [r["title"] for r in body] == ["Smart Lead Qualifier"]


def test_filter_search_case_insensitive():
    upper = client.post("/api/recipes/filter", json={"search": "GPT"}).json()
    lower = client.post("/api/recipes/filter", json={"search": "gpt"}).json()
    assert upper == lower
    assert {r["title"] for r in upper} == {"AI Task Scheduler", "Code Review Assistant"}


def test_filter_toolstack_and_sort():
    resp = client.post(
        "/api/recipes/filter",
        json={"toolstack": ["openai"], "sort_by": "popularity"},
    )
    downloads = [r["downloads"] for r in resp.json()]
    assert downloads == [890, 756, 643]


def test_filter_blank_and_null_fields_are_ignored():
    every = client.get("/api/recipes").json()
    resp = client.post(
        "/api/recipes/filter",
        json={"search": "", "difficulty": "", "tags": None, "categories": [], "toolstack": None},
    )
    assert resp.status_code == 200
    assert resp.json() == every


def test_filter_difficulty_any_case():
    resp = client.post("/api/recipes/filter", json={"difficulty": "advanced"})
    assert [r["title"] for r in resp.json()] == ["Code Review Assistant"]


def test_filter_rejects_unknown_difficulty():
    resp = client.post("/api/recipes/filter", json={"difficulty": "Expert"})
    assert resp.status_code == 400


def test_metadata_counts():
    c = TestClient(create_app())
    body = c.get("/metadata").json()
    assert body["total"] == 6
    assert {"name": "Sales", "count": 1} in body["categories"]
    assert {"name": "GPT-4", "count": 3} in body["toolstack"]
    assert body["difficulties"] == [
        {"name": "Beginner", "count": 2},
        {"name": "Intermediate", "count": 3},
        {"name": "Advanced", "count": 1},
    ]


def test_create_recipe():
    c = TestClient(create_app())
    resp = c.post("/api/recipes", json={**NEW_RECIPE, "rating": 50, "downloads": 10})
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == 7
    assert body["rating"] == 0
    assert body["downloads"] == 0
    assert body["featured"] is False
    assert c.get("/api/recipes/7").json()["title"] == NEW_RECIPE["title"]


def test_create_recipe_missing_fields():
    resp = client.post("/api/recipes", json={"title": "Only a title"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Invalid recipe data"
    assert body["errors"]


def test_create_recipe_rejects_empty_title():
    resp = client.post("/api/recipes", json={**NEW_RECIPE, "title": ""})
    assert resp.status_code == 400


def test_fresh_store_is_empty():
    c = TestClient(create_app(store=CatalogStore()))
    assert c.get("/api/recipes").json() == []
    assert c.post("/api/recipes/filter", json={"search": "gpt"}).json() == []


class _BrokenStore(CatalogStore):
    def get_all_recipes(self):
        raise RuntimeError("storage unavailable")


def test_unexpected_failure_is_500():
    c = TestClient(create_app(store=_BrokenStore()), raise_server_exceptions=False)
    resp = c.post("/api/recipes/filter", json={})
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}


def test_metadata_groups_labels_case_insensitively():
    store = CatalogStore()
    for title, category, tools, tags in [
        ("A", "Sales", ["OpenAI", "openai api"], ["NLP"]),
        ("B", "sales", ["openai"], ["nlp", "Nlp"]),
    ]:
        store.create_recipe(RecipeCreate(
            title=title,
            description="desc",
            github_url="https://github.com/example/x",
            category=category,
            toolstack=tools,
            tags=tags,
        ))
    body = TestClient(create_app(store=store)).get("/metadata").json()
    assert body["categories"] == [{"name": "Sales", "count": 2}]
    assert body["toolstack"] == [
        {"name": "OpenAI", "count": 2},
        {"name": "openai api", "count": 1},
    ]
    assert body["tags"] == [{"name": "NLP", "count": 2}]


def test_unknown_log_level_falls_back_to_info():
    create_app(store=CatalogStore(), catalog_config=CatalogConfig(log_level="VERBOSE"))
    assert logging.getLogger("recipehub").level == logging.INFO

    create_app(store=CatalogStore(), catalog_config=CatalogConfig(log_level="debug"))
    assert logging.getLogger("recipehub").level == logging.DEBUG
    logging.getLogger("recipehub").setLevel(logging.INFO)
