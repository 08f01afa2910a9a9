"""Static registry of the grocery items used to build shopping lists."""

from __future__ import annotations

import json
from pathlib import Path

from recall_app.core.models import Item


def _unsplash(photo_id: str) -> str:
    return f"https://images.unsplash.com/photo-{photo_id}?w=1080"


GROCERY_ITEMS: tuple[Item, ...] = (
    # Fresh Fruits
    Item("1", "Apples", _unsplash("1680835011462-d30471faf688")),
    Item("4", "Bananas", _unsplash("1573828235229-fb27fdc8da91")),
    Item("23", "Strawberries", _unsplash("1616690602454-882bbb363daa")),
    Item("24", "Oranges", _unsplash("1757283961709-1087406a5df1")),
    Item("25", "Grapes", _unsplash("1596363505729-4190a9506133")),
    # Fresh Vegetables
    Item("10", "Tomatoes", _unsplash("1586640167802-8af12bf651fe")),
    Item("19", "Carrots", _unsplash("1603462903957-566630607cc7")),
    Item("20", "Lettuce", _unsplash("1621954166232-658da2c17ba8")),
    Item("21", "Potatoes", _unsplash("1594885270227-c61f9bc1383d")),
    Item("22", "Onions", _unsplash("1628793561336-5e90cb873032")),
    # Dairy & Eggs
    Item("3", "Milk", _unsplash("1685531309627-f0c9e8656ff9")),
    Item("5", "Eggs", _unsplash("1635165250545-277ed55a6349")),
    Item("7", "Cheese", _unsplash("1590912710024-6d51a6771abd")),
    Item("9", "Yogurt", _unsplash("1709620044505-d7dc01c665d2")),
    Item("18", "Butter", _unsplash("1736752346246-61f4daedfde0")),
    Item("42", "Ice Cream", _unsplash("1647972488547-247963b61bc3")),
    # Meat & Seafood
    Item("8", "Chicken", _unsplash("1588767768106-1b20e51d9d68")),
    Item("53", "Salmon", _unsplash("1706115290105-37c4646a2319")),
    Item("54", "Ground Beef", _unsplash("1700777279865-fbb065328a25")),
    # Bakery
    Item("2", "Bread", _unsplash("1666114170628-b34b0dcc21aa")),
    # Pantry & Dry Goods
    Item("11", "Pasta", _unsplash("1613634333954-085b019d87b7")),
    Item("12", "Cereal", _unsplash("1616662707741-9f32deea4863")),
    Item("13", "Rice", _unsplash("1691482995300-b57fef9fa0ac")),
    Item("14", "Coffee", _unsplash("1649056747314-74345cf99a9c")),
    Item("15", "Sugar", _unsplash("1756382713824-3adf2fca82e2")),
    Item("16", "Flour", _unsplash("1641394535269-dbea1fa94ff1")),
    Item("41", "Tea Bags", _unsplash("1758272267310-d068386fe19a")),
    # Beverages
    Item("6", "Orange Juice", _unsplash("1640213505284-21352ee0d76b")),
    Item("46", "Soda", _unsplash("1637511077275-631f0dc80cf4")),
    Item("47", "Water Bottles", _unsplash("1601507793214-77d2a926582a")),
    # Snacks
    Item("28", "Cookies", _unsplash("1609299962226-8c3b9f6e8d48")),
    Item("29", "Crackers", _unsplash("1560340841-eefc7aa04432")),
    Item("30", "Chips", _unsplash("1641693148759-843d17ceac24")),
    # Condiments & Spreads
    Item("31", "Peanut Butter", _unsplash("1691480208637-6ed63aac6694")),
    Item("32", "Jam", _unsplash("1741521899993-1cbb155691a3")),
    Item("33", "Honey", _unsplash("1655169947079-5b2a38815147")),
    Item("36", "Ketchup", _unsplash("1569790554690-1c0877b2fc6c")),
    Item("37", "Mustard", _unsplash("1735027441013-032751c073e1")),
    Item("38", "Mayonnaise", _unsplash("1616803207201-0299ea417b4f")),
    Item("39", "Olive Oil", _unsplash("1474979266404-7eaacbcd87c5")),
    Item("40", "Vinegar", _unsplash("1583907659441-addbe699e921")),
    Item("44", "Salad Dressing", _unsplash("1744233277849-029cd7f525d2")),
    # Canned Foods
    Item("34", "Canned Soup", _unsplash("1695623675612-9745e0c2849b")),
    Item("35", "Canned Beans", _unsplash("1653174577821-9ab410d92d44")),
    Item("45", "Pickles", _unsplash("1727285101091-8f9714f87908")),
    # Frozen Foods
    Item("43", "Frozen Vegetables", _unsplash("1658708009342-af5795fa4284")),
    # Personal Care
    Item("26", "Shampoo", _unsplash("1673557818087-4056db868568")),
    Item("27", "Toothpaste", _unsplash("1759910548177-638d4e6ee0d5")),
    Item("48", "Bar Soap", _unsplash("1661450159298-d58a3b98f3a4")),
    Item("52", "Cotton Swabs", _unsplash("1655313719494-1d700d4aedd4")),
    # Health & Wellness
    Item("17", "Vitamins", _unsplash("1682978900142-9ab110f7a868")),
    Item("49", "Band-Aids", _unsplash("1624884270783-2688cce31870")),
    Item("50", "Hand Sanitizer", _unsplash("1695624825876-7110a459a21a")),
    # Household Items
    Item("55", "Tissues", _unsplash("1611907992783-08f52a765966")),
    Item("56", "Toilet Paper", _unsplash("1588318072736-5d5a82354cb9")),
    Item("57", "Paper Towels", _unsplash("1653267408946-c4f8421392cd")),
    Item("58", "Dish Soap", _unsplash("1698664434322-94a43b98b9ba")),
    Item("59", "Laundry Detergent", _unsplash("1646013976311-d7de74c2f679")),
    Item("60", "Sponges", _unsplash("1722356541555-eeabc38f80a8")),
    Item("61", "Aluminum Foil", _unsplash("1678108439262-a11d16f99c0c")),
    Item("62", "Plastic Wrap", _unsplash("1604393587377-bbe4a437ec80")),
    Item("63", "Trash Bags", _unsplash("1615662724527-96679561c0ee")),
    Item("64", "Bleach", _unsplash("1584813470613-5b1c1cad3d69")),
    Item("65", "Light Bulbs", _unsplash("1565516424918-cb83feb00c48")),
    Item("66", "Batteries", _unsplash("1591964006776-90b32e88f5ec")),
)


class ItemCatalog:
    """Immutable, ordered lookup table of candidate items."""

    def __init__(self, items: list[Item] | tuple[Item, ...]) -> None:
        if not items:
            raise ValueError("Item catalog cannot be empty.")
        by_id: dict[str, Item] = {}
        for item in items:
            if item.id in by_id:
                raise ValueError(f"Duplicate item id in catalog: {item.id!r}")
            by_id[item.id] = item
        self._items = tuple(items)
        self._by_id = by_id

    @classmethod
    def default(cls) -> "ItemCatalog":
        return cls(GROCERY_ITEMS)

    @classmethod
    def from_json_file(cls, file_path: Path) -> "ItemCatalog":
        """Load a catalog from a JSON list of ``{"id", "name", "image"}`` objects."""
        raw = json.loads(file_path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"Catalog file {file_path} must contain a JSON list.")
        items: list[Item] = []
        for entry in raw:
            try:
                items.append(Item(id=str(entry["id"]), name=str(entry["name"]), image_ref=str(entry["image"])))
            except (KeyError, TypeError) as exc:
                raise ValueError(f"Malformed catalog entry in {file_path}: {entry!r}") from exc
        return cls(items)

    def all_items(self) -> tuple[Item, ...]:
        return self._items

    def get(self, item_id: str) -> Item | None:
        return self._by_id.get(item_id)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)
