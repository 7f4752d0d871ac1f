"""File-based templates -- the most common real-world pattern.

Finds template bodies on disk with the Engine's FileSystemFinder, and shows
layouts (layout/last_buffer), sections (section/append/show/supply) and
partials (insert/insertif).

Run:
    python app.py
"""

from pathlib import Path

from vellum import Engine

templates_dir = Path(__file__).parent / "templates"
engine = Engine(templates_dir)

nav_items = [
    {"url": "/", "label": "Home"},
    {"url": "/about", "label": "About"},
]

home_output = engine.render(
    "home",
    {
        "site_name": "My Site",
        "nav_items": nav_items,
        "title": "Welcome",
        "message": "This is a vellum-powered site with layouts & partials.",
    },
)

about_output = engine.render(
    "about",
    {
        "site_name": "My Site",
        "nav_items": nav_items,
        "title": "About Us",
        "description": "Built with vellum, where templates are plain Python.",
    },
)


def main() -> None:
    print("=== Home Page ===")
    print(home_output)
    print()
    print("=== About Page ===")
    print(about_output)


if __name__ == "__main__":
    main()
