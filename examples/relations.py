from __future__ import annotations

from dataclasses import dataclass, field

from blueprint import BlueprintFactory, VariantMapList


@dataclass
class Item:
    name: str
    price: float


@dataclass
class Store:
    name: str
    best_seller: Item | None = None
    items: list[Item] = field(default_factory=list)


class ItemFactory(BlueprintFactory[Item]):
    def blueprint(self) -> Item:
        return Item(name="Cookie", price=1.99)


class StoreFactory(BlueprintFactory[Store]):
    def blueprint(self) -> Store:
        return Store(name="Corner shop")


item_factory = ItemFactory()
store_factory = StoreFactory()

with_best_seller = store_factory.with_(item_factory.create, "best_seller")
print(with_best_seller.create())

stocked = with_best_seller.with_(item_factory.create, 3, "items")
print(stocked.create())

fruity = store_factory.with_(
    item_factory.create,
    VariantMapList([{"name": "Strawberry"}, {"name": "Apple"}]),
    lambda store, items: store.items.extend(items),
)
print(fruity.create({"name": "Fruit stall"}))

# the base factory never changes
print(store_factory.create())
