from dataclasses import dataclass

from blueprint import VariantList, VariantMapList, from_template


@dataclass
class Item:
    name: str | None = None
    price: float | None = None
    weight: float | None = None


item_factory = from_template(Item(name="Blueprint", price=5.0, weight=5.0))

item = item_factory.create()
print(item)

item = item_factory.create({"name": "Cookie", "price": 1.99})
print(item)

item = item_factory.create(Item(name="Muffin"))
print(item)

items = item_factory.create(3)
print(items)

items = item_factory.create(VariantList([Item(name="Strawberry"), Item(name="Apple")]))
print(items)

items = item_factory.create(VariantMapList([{"name": "Orange"}, {"price": 0.5}]))
print(items)
