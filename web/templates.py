# -*- coding: utf-8 -*-
"""
===================================
Web 模板层 - 占位符替换与页面生成
===================================

职责：
1. 将商品记录填入 {%TOKEN%} 占位符
2. 生成总览页、详情页
3. 生成错误页面
"""

from __future__ import annotations

import html
import re
from typing import Any, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from web.services import SiteContext


# ============================================================
# 占位符替换
# ============================================================

PLACEHOLDER_PATTERN = re.compile(r"\{%(.+?)%\}")

PRODUCT_CARDS_TOKEN = "{%PRODUCT_CARDS%}"
NOT_ORGANIC_TOKEN = "NOT_ORGANIC"
NOT_ORGANIC_CLASS = "not-organic"

NOT_FOUND_BODY = "<h1>Page not found</h1>"


def to_text(value: Any) -> str:
    """将记录值转换为文本（布尔值和空值使用 JSON 字面量）"""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return str(value)


def build_substitutions(record: Mapping[str, Any]) -> dict:
    """
    由记录构造 {TOKEN: 文本} 映射

    字段名转大写作为占位符名；记录含 organic 字段时额外提供 NOT_ORGANIC。
    """
    substitutions = {str(key).upper(): to_text(value) for key, value in record.items()}
    if "organic" in record and NOT_ORGANIC_TOKEN not in substitutions:
        substitutions[NOT_ORGANIC_TOKEN] = "" if record["organic"] else NOT_ORGANIC_CLASS
    return substitutions


def replace_template(template: str, record: Mapping[str, Any]) -> str:
    """
    用记录填充模板

    单次扫描替换，替换进来的值不会被再次解析；
    未匹配的占位符原样保留，不做 HTML 转义。

    Args:
        template: 含 {%TOKEN%} 的模板
        record: 商品记录
    """
    substitutions = build_substitutions(record)

    def _lookup(match: re.Match) -> str:
        return substitutions.get(match.group(1), match.group(0))

    return PLACEHOLDER_PATTERN.sub(_lookup, template)


# ============================================================
# 页面生成
# ============================================================

def render_overview(context: 'SiteContext') -> str:
    """渲染总览页：每条记录一张卡片，按加载顺序拼接"""
    cards_html = "".join(
        replace_template(context.card_template, record)
        for record in context.records
    )
    return context.overview_template.replace(PRODUCT_CARDS_TOKEN, cards_html, 1)


def render_product(context: 'SiteContext', index: int) -> str:
    """渲染商品详情页，index 由调用方保证在范围内"""
    return replace_template(context.product_template, context.records[index])


ERROR_CSS = """
body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
    background-color: #f8fafc;
    color: #1e293b;
    display: flex;
    justify-content: center;
    align-items: center;
    min-height: 100vh;
    margin: 0;
}

.container {
    background: #ffffff;
    padding: 2rem;
    border-radius: 1rem;
    box-shadow: 0 4px 6px -1px rgb(0 0 0 / 0.1);
    text-align: center;
}

.text-muted {
    font-size: 0.75rem;
    color: #64748b;
}
"""


def render_error_page(
    status_code: int,
    message: str,
    details: Optional[str] = None
) -> bytes:
    """
    渲染错误页面

    Args:
        status_code: HTTP 状态码
        message: 错误消息
        details: 详细信息
    """
    details_html = f"<p class='text-muted'>{html.escape(details)}</p>" if details else ""

    page = f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>Error {status_code}</title>
  <style>{ERROR_CSS}</style>
</head>
<body>
  <div class="container">
    <h2>{status_code}</h2>
    <p>{html.escape(message)}</p>
    {details_html}
    <a href="/overview">&larr; Back to overview</a>
  </div>
</body>
</html>"""
    return page.encode("utf-8")
