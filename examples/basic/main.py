"""Basic example demonstrating typed-router.

A small shop wires its screens into a Router at startup, then resolves
paths and aliases into screen text.

Run with:
    python main.py

Registered screens:
    product/list/:category/:num  - Product list for a category and page
    product/details/:id          - Product details
    product/add                  - Add a product
"""

import logging
from dataclasses import dataclass

from typed_router import Alias, DebuggingRouterDelegate, Path, Router, is_not_found, start

PRODUCT_DETAILS = start().path("product", "details").placeholder("id", str).template()
ADD_PRODUCT = start().path("product", "add").template()


@dataclass
class ListTap:
    category: str


PRODUCT_LIST_PLUS_TAP = Alias("product.list.plus.tap", ListTap)


def product_details(product_id: str) -> Path:
    return PRODUCT_DETAILS.path(product_id)


router = Router("shop")


@router.route("product/list/:category/:num")
def product_list(category: str, page_number: int) -> str:
    if category == "hats":
        return f"This is the Hat Specific product list, for page {page_number}"
    return f"This is the product list {category}, page {page_number}"


router.add(PRODUCT_DETAILS, lambda product_id: f"Product details for {product_id}")
router.add(ADD_PRODUCT, lambda: "Add a product")


@router.alias(PRODUCT_LIST_PLUS_TAP)
def plus_tap(context: ListTap) -> Path | str:
    if context.category == "hats":
        return "invalid/action/no/hats/here"
    return ADD_PRODUCT.path()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    debugging = DebuggingRouterDelegate()
    router.delegate = debugging

    print(router.resolve("product/list/hats/0"))
    print(router.resolve(product_details("123456")))
    print(router.resolve(PRODUCT_LIST_PLUS_TAP, ListTap("boots")))

    missing = router.resolve(PRODUCT_LIST_PLUS_TAP, ListTap("hats"))
    if is_not_found(missing):
        print(missing.render())

    print(f"Known routes in {router}")
    print("----------")
    print(router.debug_description())
    print("----------")
