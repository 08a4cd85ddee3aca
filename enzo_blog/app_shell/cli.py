import argparse
import json
import logging
import os
import sys
from pathlib import Path

from enzo_blog.app_shell.context import BlogContext
from enzo_blog.components.markdown import RenderMarkdownInput, run_render
from enzo_blog.components.posts import (
    CreatePostInput,
    DeletePostInput,
    GetPostInput,
    ListPostsInput,
    PostValidationIssue,
    RenderPostInput,
    StorageError,
    UpdatePostInput,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_update,
)
from enzo_blog.components.posts import run_render as run_render_post
from enzo_blog.rules.loader import load_rules
from enzo_blog.rules.models import Rules

logger = logging.getLogger("cli")

RULES_PATH = os.environ.get("BLOG_RULES_PATH", "rules.yaml")


def get_context(rules_path: str, data_dir: str | None) -> BlogContext:
    path = Path(rules_path)
    if path.exists():
        rules = load_rules(path)
    else:
        logger.warning(f"Rules file {rules_path} not found; using defaults.")
        rules = Rules()
    return BlogContext.create(rules, data_dir=data_dir or os.environ.get("BLOG_DATA_DIR"))


def _fail(errors: list[PostValidationIssue]) -> int:
    for err in errors:
        logger.error(err.message)
    return 1


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=4, ensure_ascii=False))


def handle_list(ctx: BlogContext, args: argparse.Namespace) -> int:
    result = run_list(ListPostsInput(limit=args.limit), ctx.post_store)
    if args.json:
        _print_json([p.to_record() for p in result.posts])
        return 0
    for post in result.posts:
        print(f"{post.id}  {post.updated_at.isoformat()}  {post.title}")
    print(f"{len(result.posts)} of {result.total} posts")
    return 0


def handle_show(ctx: BlogContext, args: argparse.Namespace) -> int:
    if args.html:
        rendered = run_render_post(
            RenderPostInput(post_id=args.id, link_references=ctx.rules.render.link_references),
            ctx.post_store,
        )
        if not rendered.success:
            return _fail(rendered.errors)
        print(rendered.html)
        for ref in rendered.missing_references:
            logger.warning(f"Reference to missing post: {ref}")
        return 0

    result = run_get(GetPostInput(post_id=args.id), ctx.post_store)
    if not result.success or result.post is None:
        return _fail(result.errors)
    _print_json(result.post.to_record())
    return 0


def _read_content(args: argparse.Namespace) -> str | None:
    if args.content_file:
        if args.content_file == "-":
            return sys.stdin.read()
        return Path(args.content_file).read_text(encoding="utf-8")
    return args.content


def handle_create(ctx: BlogContext, args: argparse.Namespace) -> int:
    inp = CreatePostInput(title=args.title, content=_read_content(args), format=args.format)
    result = run_create(inp, ctx.post_store)
    if not result.success or result.post is None:
        return _fail(result.errors)
    print(result.post.id)
    return 0


def handle_update(ctx: BlogContext, args: argparse.Namespace) -> int:
    inp = UpdatePostInput(
        post_id=args.id,
        title=args.title,
        content=_read_content(args),
        format=args.format,
    )
    result = run_update(inp, ctx.post_store)
    if not result.success or result.post is None:
        return _fail(result.errors)
    print(f"Updated {result.post.id}")
    return 0


def handle_delete(ctx: BlogContext, args: argparse.Namespace) -> int:
    result = run_delete(DeletePostInput(post_id=args.id), ctx.post_store)
    if not result.success:
        return _fail(result.errors)
    print(f"Deleted {args.id}")
    return 0


def handle_render(args: argparse.Namespace) -> int:
    source = sys.stdin.read() if args.file == "-" else Path(args.file).read_text(encoding="utf-8")
    print(run_render(RenderMarkdownInput(markdown=source)).html)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="enzo-blog", description="Enzo blog CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("--data-dir", help="Override storage.data_dir")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # list
    list_parser = subparsers.add_parser("list", help="List posts, newest first")
    list_parser.add_argument("--limit", type=int)
    list_parser.add_argument("--json", action="store_true", help="Print full records as JSON")

    # show
    show_parser = subparsers.add_parser("show", help="Show a post")
    show_parser.add_argument("id")
    show_parser.add_argument("--html", action="store_true", help="Print rendered HTML")

    # create / update
    create_parser = subparsers.add_parser("create", help="Create a post")
    create_parser.add_argument("--title", required=True)
    update_parser = subparsers.add_parser("update", help="Update a post")
    update_parser.add_argument("id")
    update_parser.add_argument("--title")
    for sub in (create_parser, update_parser):
        source = sub.add_mutually_exclusive_group()
        source.add_argument("--content")
        source.add_argument("--content-file", help="Read content from file ('-' for stdin)")
        sub.add_argument("--format", choices=["markdown", "html"])

    # delete
    delete_parser = subparsers.add_parser("delete", help="Delete a post")
    delete_parser.add_argument("id")

    # render
    render_parser = subparsers.add_parser("render", help="Render a markdown file to HTML")
    render_parser.add_argument("file", help="Markdown file ('-' for stdin)")

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    handlers = {
        "list": handle_list,
        "show": handle_show,
        "create": handle_create,
        "update": handle_update,
        "delete": handle_delete,
    }

    try:
        if args.command == "render":
            return handle_render(args)
        ctx = get_context(args.rules, args.data_dir)
        return handlers[args.command](ctx, args)
    except StorageError as e:
        logger.error(f"Storage failure: {e}")
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1
    except ValueError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
