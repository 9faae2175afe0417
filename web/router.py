# -*- coding: utf-8 -*-
"""
===================================
Web 路由层 - 请求分发
===================================

职责：
1. 解析请求路径与查询参数
2. 精确匹配到固定的路由类型
3. 分发到对应的处理器
"""

from __future__ import annotations

import logging
from enum import Enum
from http import HTTPStatus
from typing import Dict, List, TYPE_CHECKING, Tuple
from urllib.parse import parse_qs, urlparse

from web.handlers import HtmlResponse, Response, SiteHandler
from web.services import SiteContext
from web.templates import render_error_page

if TYPE_CHECKING:
    from http.server import BaseHTTPRequestHandler

logger = logging.getLogger(__name__)


# ============================================================
# 路由定义
# ============================================================

class RouteKind(Enum):
    """路由类型（有限集合）"""

    OVERVIEW = "overview"
    PRODUCT = "product"
    API = "api"
    NOT_FOUND = "not_found"


# 精确匹配，不支持前缀或通配
ROUTE_TABLE: Dict[str, RouteKind] = {
    "/": RouteKind.OVERVIEW,
    "/overview": RouteKind.OVERVIEW,
    "/product": RouteKind.PRODUCT,
    "/api": RouteKind.API,
}

ROUTE_DESCRIPTIONS: Dict[RouteKind, str] = {
    RouteKind.OVERVIEW: "商品总览",
    RouteKind.PRODUCT: "商品详情 (?id=<index>)",
    RouteKind.API: "商品原始 JSON",
}


def match_route(path: str) -> RouteKind:
    """
    匹配路由

    Args:
        path: 请求路径（不含查询串）

    Returns:
        路由类型，未匹配时为 NOT_FOUND
    """
    if path == "":
        path = "/"
    return ROUTE_TABLE.get(path, RouteKind.NOT_FOUND)


class Router:
    """
    路由管理器

    负责：
    1. 匹配请求路径
    2. 分发到处理器
    3. 兜底处理异常
    """

    def __init__(self, context: SiteContext):
        self.handler = SiteHandler(context)

    def resolve(self, path: str, query: Dict[str, List[str]]) -> Response:
        """
        根据路径与查询参数生成响应

        Args:
            path: 请求路径
            query: parse_qs 解析后的查询参数
        """
        kind = match_route(path)

        if kind is RouteKind.OVERVIEW:
            return self.handler.handle_overview()
        if kind is RouteKind.PRODUCT:
            return self.handler.handle_product(query)
        if kind is RouteKind.API:
            return self.handler.handle_api()
        if kind is RouteKind.NOT_FOUND:
            return self.handler.handle_not_found()

        raise ValueError(f"未处理的路由类型: {kind}")

    def dispatch(
        self,
        request_handler: 'BaseHTTPRequestHandler',
        method: str
    ) -> None:
        """
        分发请求

        Args:
            request_handler: HTTP 请求处理器
            method: HTTP 方法
        """
        parsed = urlparse(request_handler.path)
        path = parsed.path
        query = parse_qs(parsed.query)

        try:
            response = self.resolve(path, query)
        except Exception as e:
            logger.exception(f"[Router] 处理请求失败: {method} {path} - {e}")
            response = HtmlResponse(
                render_error_page(500, "Internal server error", str(e)),
                status=HTTPStatus.INTERNAL_SERVER_ERROR
            )

        logger.debug(f"[Router] {method} {request_handler.path} -> {int(response.status)}")
        response.send(request_handler)

    def list_routes(self) -> List[Tuple[str, str, str]]:
        """
        列出所有路由

        Returns:
            [(method, path, description), ...]
        """
        routes = [
            ("GET", path, ROUTE_DESCRIPTIONS[kind])
            for path, kind in ROUTE_TABLE.items()
        ]
        return sorted(routes, key=lambda x: (x[1], x[0]))
