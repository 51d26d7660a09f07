"""羊皮纸档案馆主题常量。"""

# 色板
PAGE = "#f9f6f0"        # 房间地面 / 页面底色
PAGE_MID = "#efe8da"    # 顶栏、侧栏
INK = "#3a2a1a"         # 房间名
INK_DIM = "#7a6a5a"     # 物件名、次要文字
WALL = "#5a4a3a"
WALL_SOFT = "#b8a88f"   # 走廊线
GOLD = "#b8860b"
EMBER = "#c2410c"
ERROR = "#f87171"

# 物件圆点
OBJ_EMPTY = WALL_SOFT
OBJ_ANNOTATED = GOLD
OBJ_SELECTED = EMBER

# 字体
FONT_SERIF = "'Cormorant Garamond', Georgia, serif"
FONT_MONO = "'Courier Prime', 'Courier New', monospace"

# 全局 CSS
GLOBAL_CSS = """
@import url('https://fonts.googleapis.com/css2?family=Cormorant+Garamond:wght@500;700&family=Courier+Prime&display=swap');

:root {
    --page: %(page)s;
    --page-mid: %(page_mid)s;
    --ink: %(ink)s;
    --ink-dim: %(ink_dim)s;
    --wall: %(wall)s;
    --gold: %(gold)s;
    --ember: %(ember)s;
}

body, .q-page, .nicegui-content {
    background: var(--page) !important;
    color: var(--ink) !important;
    font-family: %(font_mono)s;
}

/* NiceGUI 默认 padding 清理 */
.nicegui-content {
    padding: 0 !important;
}

.palace-title {
    font-family: %(font_serif)s;
    color: var(--gold);
    letter-spacing: 0.12em;
    font-weight: 700;
}

.palace-topic {
    font-style: italic;
    color: var(--ink-dim);
}

.palace-canvas img { cursor: pointer; }

@keyframes breathe {
    0%%, 100%% { opacity: 1; }
    50%% { opacity: 0.55; }
}

.animate-breathe {
    animation: breathe 1.6s ease-in-out infinite;
}

/* Quasar 覆盖 */
.q-card { box-shadow: none !important; border: 1px solid var(--wall); }
.q-field__native, .q-field__input { color: var(--ink) !important; }
""" % {
    "page": PAGE,
    "page_mid": PAGE_MID,
    "ink": INK,
    "ink_dim": INK_DIM,
    "wall": WALL,
    "gold": GOLD,
    "ember": EMBER,
    "font_serif": FONT_SERIF,
    "font_mono": FONT_MONO,
}
