"""Mind Palace CLI - 用 LLM 生成记忆宫殿，给物件写记忆笔记。"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

load_dotenv()
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mind_palace.controller import PalaceController
from mind_palace.engine.room_generator import RoomGenerationError
from mind_palace.models import PROVIDERS
from mind_palace.palace.store import PALACE_PATH, PalaceStore, PalaceStoreError
from mind_palace.palace.types import Palace
from mind_palace.render.svg import render_palace_svg

console = Console()


def _fail(msg: str):
    console.print(f"  [red]{escape(msg)}[/]\n")
    sys.exit(1)


def _load(ctx: click.Context) -> tuple[PalaceController, Palace]:
    controller: PalaceController = ctx.obj
    try:
        palace = controller.load()
    except PalaceStoreError as e:
        _fail(str(e))
    if palace is None:
        _fail("还没有宫殿，请先运行 mind-palace new <主题>")
    return controller, palace


@click.group()
@click.option("--file", "palace_file", type=click.Path(dir_okay=False), default=str(PALACE_PATH),
              show_default=True, help="宫殿 JSON 文件路径")
@click.option("--verbose", "-v", is_flag=True, help="输出调试日志")
@click.pass_context
def cli(ctx: click.Context, palace_file: str, verbose: bool):
    """Mind Palace - 用 LLM 生成的记忆宫殿"""
    level = "DEBUG" if verbose else os.environ.get("MIND_PALACE_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ctx.obj = PalaceController(store=PalaceStore(Path(palace_file)))


@cli.command()
@click.argument("topic")
@click.pass_obj
def new(controller: PalaceController, topic: str):
    """新建一座宫殿（覆盖已有宫殿）。"""
    try:
        palace = controller.create_palace(topic)
    except (ValueError, PalaceStoreError) as e:
        _fail(str(e))
    console.print(f"\n  [green]✓[/] 已新建宫殿: [bold]{palace.topic}[/]")
    console.print("  运行 [bold cyan]mind-palace generate[/] 生成第一个房间\n")


@cli.command()
@click.option("--objects", "-o", "show_objects", is_flag=True, help="同时列出物件和记忆笔记")
@click.pass_context
def show(ctx: click.Context, show_objects: bool):
    """显示宫殿中的房间。"""
    _, palace = _load(ctx)
    total = sum(len(r.objects) for r in palace.rooms)
    console.print()
    console.print(Panel(
        f"{len(palace.rooms)} 个房间 · {total} 个物件 · {palace.annotated_count()} 条记忆",
        title=f"⬡ {palace.topic}",
        border_style="yellow",
    ))
    if not palace.rooms:
        console.print("  [dim]还没有房间。[/]\n")
        return

    by_id = {r.id: r for r in palace.rooms}
    table = Table(show_header=True, header_style="bold")
    table.add_column("id", style="dim")
    table.add_column("房间", style="cyan")
    table.add_column("网格")
    table.add_column("连接")
    table.add_column("物件", justify="right")
    for room in palace.rooms:
        linked = ", ".join(by_id[c].name for c in room.connections if c in by_id)
        done = sum(1 for o in room.objects if o.memory)
        table.add_row(
            room.id, room.name,
            f"({room.grid_position.x}, {room.grid_position.y})",
            linked or "-",
            f"{done}/{len(room.objects)}",
        )
    console.print(table)

    if show_objects:
        for room in palace.rooms:
            console.print(f"\n  [bold cyan]{room.name}[/]  [dim]{room.description}[/]")
            for obj in room.objects:
                note = escape(obj.memory) if obj.memory else "[dim]（空）[/]"
                console.print(f"    [yellow]●[/] {obj.name} [dim]{obj.id}[/]")
                console.print(f"      {note}", highlight=False)
    console.print()


@cli.command()
@click.option("--provider", "-p", type=click.Choice(PROVIDERS), default=None,
              help="LLM provider（默认读取 MIND_PALACE_PROVIDER）")
@click.pass_context
def generate(ctx: click.Context, provider: str | None):
    """用 LLM 生成一个新房间。"""
    controller, palace = _load(ctx)
    if provider:
        controller.update_settings(provider=provider)
    console.print(f"\n  正在为 [bold]{palace.topic}[/] 生成房间（{controller.provider}）...")
    try:
        room = controller.generate_room()
    except (RoomGenerationError, PalaceStoreError) as e:
        _fail(f"生成失败: {e}")
    console.print(
        f"  [green]✓[/] [bold cyan]{room.name}[/] @ "
        f"({room.grid_position.x}, {room.grid_position.y})，{len(room.objects)} 个物件"
    )
    for obj in room.objects:
        console.print(f"    [yellow]●[/] {obj.name}: [dim]{obj.description}[/]", highlight=False)
    console.print()


@cli.command()
@click.argument("room_id")
@click.argument("object_id")
@click.argument("note")
@click.pass_context
def remember(ctx: click.Context, room_id: str, object_id: str, note: str):
    """给物件写记忆笔记（空字符串清除）。"""
    controller, _ = _load(ctx)
    try:
        obj = controller.save_memory(room_id, object_id, note)
    except KeyError:
        _fail(f"找不到物件 {room_id}/{object_id}")
    except PalaceStoreError as e:
        _fail(str(e))
    console.print(f"\n  [green]✓[/] 已保存 [bold]{obj.name}[/] 的记忆\n")


@cli.command()
@click.argument("new_topic")
@click.pass_context
def topic(ctx: click.Context, new_topic: str):
    """修改宫殿主题。"""
    controller, _ = _load(ctx)
    try:
        controller.update_settings(topic=new_topic)
    except PalaceStoreError as e:
        _fail(str(e))
    console.print(f"\n  [green]✓[/] 主题已改为 [bold]{controller.palace.topic}[/]\n")


@cli.command("export-svg")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
def export_svg(ctx: click.Context, path: str):
    """把宫殿平面图导出为 SVG。"""
    _, palace = _load(ctx)
    out = Path(path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(render_palace_svg(palace), encoding="utf-8")
    except OSError as e:
        _fail(f"导出失败: {e}")
    console.print(f"\n  [green]✓[/] 已导出: {out}\n")


@cli.command()
@click.option("--port", default=8080, show_default=True)
def gui(port: int):
    """启动网页界面。"""
    from mind_palace.gui.app import main as gui_main
    gui_main(port=port)


if __name__ == "__main__":
    cli()
