"""
BookBuddies CLI

书籍发布、客服会话与卖家注册的命令行入口。
所有命令输出结构化 JSON。

用法:
    python -m bookbuddies.cli post --title "Dune" --author "Herbert" --price 12.5 --description "classic" \
        --shipping-method "Local Pickup"
    python -m bookbuddies.cli edit --id book_123456 --price 10
    python -m bookbuddies.cli listings --limit 20
    python -m bookbuddies.cli chat --message "Where is my order?"
    python -m bookbuddies.cli register-seller --file seller.yaml --id-card-photo id.jpg --current-photo me.jpg
"""

import argparse
import asyncio
import json
import sys
from typing import Any

import yaml

from bookbuddies.modules.listing.models import Category, ShippingMethod

BOOK_ARGS = {
    "title": "title",
    "author": "author",
    "price": "price_text",
    "description": "description",
    "category": "category",
}

SHIPPING_ARGS = {
    "shipping_method": "method",
    "shipping_cost": "cost_text",
    "address": "address",
    "city": "city",
    "postal_code": "postal_code",
}


def _json_out(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2, default=str))


def _listing_store():
    from bookbuddies.core.config import get_config
    from bookbuddies.modules.listing.store import JsonListingStore

    storage = get_config().storage
    return JsonListingStore(
        path=storage.get("listings_path", "data/listings.json"),
        max_records=storage.get("max_records", 5000),
    )


def _apply_form_args(controller: Any, args: argparse.Namespace) -> None:
    from bookbuddies.modules.listing.models import PickResult

    for arg_name, field_name in BOOK_ARGS.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            controller.set_field(field_name, value)
    for arg_name, field_name in SHIPPING_ARGS.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            controller.set_shipping_field(field_name, value)
    if getattr(args, "image", None):
        controller.attach_image(PickResult(uri=args.image))


async def cmd_post(args: argparse.Namespace) -> None:
    from bookbuddies.core.config import get_config
    from bookbuddies.modules.listing.form import ListingFormController

    controller = ListingFormController(_listing_store(), config=get_config().listing)
    _apply_form_args(controller, args)
    result = await controller.submit()
    _json_out(result.to_dict())


async def cmd_edit(args: argparse.Namespace) -> None:
    from bookbuddies.core.config import get_config
    from bookbuddies.modules.listing.form import ListingFormController

    store = _listing_store()
    existing = await store.get(args.id)
    if existing is None:
        _json_out({"success": False, "error": f"Listing not found: {args.id}"})
        return

    controller = ListingFormController(store, existing=existing, config=get_config().listing)
    _apply_form_args(controller, args)
    result = await controller.submit()
    _json_out(result.to_dict())


async def cmd_listings(args: argparse.Namespace) -> None:
    listings = await _listing_store().list_listings(limit=args.limit)
    _json_out({"total": len(listings), "listings": [item.to_dict() for item in listings]})


async def cmd_chat(args: argparse.Namespace) -> None:
    from bookbuddies.core.config import get_config
    from bookbuddies.core.error_handler import ChatError
    from bookbuddies.modules.support.chat import SupportChat

    chat = SupportChat(config=get_config().support)
    errors = []
    for text in args.message:
        try:
            chat.send_message(text)
        except ChatError as e:
            errors.append(e.to_dict())
    await chat.drain()
    _json_out({"messages": [m.to_dict() for m in chat.messages], "errors": errors})


async def cmd_register_seller(args: argparse.Namespace) -> None:
    from bookbuddies.core.config import get_config
    from bookbuddies.modules.listing.models import PickResult
    from bookbuddies.modules.sellers.registration import SellerRegistrationForm
    from bookbuddies.modules.sellers.registry import JsonSellerRegistry

    with open(args.file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    form = SellerRegistrationForm()
    for name, value in data.items():
        form.set_field(name, "" if value is None else str(value))
    if args.id_card_photo:
        form.attach_photo("id_card", PickResult(uri=args.id_card_photo))
    if args.current_photo:
        form.attach_photo("current", PickResult(uri=args.current_photo))

    registry = JsonSellerRegistry(get_config().storage.get("sellers_path", "data/seller_applications.json"))
    result = await form.submit(registry)
    _json_out(result.to_dict())


def _add_form_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--title", help="书名")
    p.add_argument("--author", help="作者")
    p.add_argument("--price", help="售价（原样交给表单解析）")
    p.add_argument("--description", help="描述")
    p.add_argument("--category", choices=[c.value for c in Category], help="分类")
    p.add_argument("--image", help="封面图片 URI")
    p.add_argument("--shipping-method", choices=[m.value for m in ShippingMethod], help="配送方式")
    p.add_argument("--shipping-cost", help="运费")
    p.add_argument("--address", help="发货地址")
    p.add_argument("--city", help="城市")
    p.add_argument("--postal-code", help="邮编")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookbuddies-cli",
        description="BookBuddies 二手书交易 CLI",
    )
    sub = parser.add_subparsers(dest="command", help="可用命令")

    # post
    p = sub.add_parser("post", help="发布书籍")
    _add_form_arguments(p)

    # edit
    p = sub.add_parser("edit", help="编辑已发布书籍")
    p.add_argument("--id", required=True, help="书籍 ID")
    _add_form_arguments(p)

    # listings
    p = sub.add_parser("listings", help="查看已发布书籍")
    p.add_argument("--limit", type=int, default=50, help="返回数量")

    # chat
    p = sub.add_parser("chat", help="联系客服")
    p.add_argument("--message", nargs="+", required=True, help="消息内容，可多条")

    # register-seller
    p = sub.add_parser("register-seller", help="申请成为卖家")
    p.add_argument("--file", required=True, help="注册信息 YAML 文件")
    p.add_argument("--id-card-photo", help="证件照 URI")
    p.add_argument("--current-photo", help="本人近照 URI")

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    dispatch = {
        "post": cmd_post,
        "edit": cmd_edit,
        "listings": cmd_listings,
        "chat": cmd_chat,
        "register-seller": cmd_register_seller,
    }

    handler = dispatch.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(handler(args))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        _json_out({"error": str(e)})
        sys.exit(1)


if __name__ == "__main__":
    main()
