"""Custom helpers and filters -- extending vellum with register_helper/register_filter.

Also renders under an alias, so the invoice body calls ``T.money`` style
names instead of ``this``.

Run:
    python app.py
"""

from pathlib import Path

from vellum import Engine

templates_dir = Path(__file__).parent / "templates"
engine = Engine(templates_dir, alias="T")


# Custom filter: value first, stage arguments after it
def money(amount: float, currency: str = "$") -> str:
    """Format amount as currency."""
    return f"{currency}{amount:,.2f}"


engine.register_filter("money", money)


# Custom helpers: called by name from the body
def pluralize(n: int, singular: str, plural: str) -> str:
    """Return singular or plural form based on count."""
    return singular if n == 1 else plural


def is_prime(n: int) -> bool:
    """Test if integer is prime."""
    if n < 2:
        return False
    return all(n % i != 0 for i in range(2, int(n**0.5) + 1))


engine.register_helper("pluralize", pluralize)
engine.register_helper("is_prime", is_prime)

output = engine.render(
    "invoice",
    {
        "customer": "  ada lovelace ",
        "total": 1234.56,
        "item_count": 3,
        "items": [
            {"name": "Widget A", "price": 19.99, "qty": 2},
            {"name": "Widget <B>", "price": 5.00, "qty": 1},
        ],
    },
)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
