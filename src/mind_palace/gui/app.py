"""NiceGUI 应用入口 — 记忆宫殿界面。"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

from nicegui import ui

from mind_palace.gui.theme import GLOBAL_CSS


def setup_routes():
    """注册路由。"""

    @ui.page("/")
    def palace_page():
        ui.add_css(GLOBAL_CSS)
        from mind_palace.gui.pages.palace import create_palace_page
        create_palace_page()


def main(port: int = 8080):
    """GUI 入口点。"""
    logging.basicConfig(
        level=os.environ.get("MIND_PALACE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    setup_routes()
    ui.run(
        title="Mind Palace",
        port=port,
        favicon="⬡",
        dark=False,
        reload=False,
    )


if __name__ == "__main__":
    main()
