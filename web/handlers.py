# -*- coding: utf-8 -*-
"""
===================================
Web 处理器层 - 请求处理
===================================

职责：
1. 处理四类路由请求（总览、详情、API、未找到）
2. 校验查询参数
3. 返回响应数据
"""

from __future__ import annotations

import logging
import re
from http import HTTPStatus
from typing import Dict, List, Optional, TYPE_CHECKING

from web.services import SiteContext
from web.templates import (
    NOT_FOUND_BODY,
    render_error_page,
    render_overview,
    render_product,
)

if TYPE_CHECKING:
    from http.server import BaseHTTPRequestHandler

logger = logging.getLogger(__name__)

CUSTOM_HEADER = ("my-own-header", "hello-world")

# 商品 id 仅接受 ASCII 十进制整数
_INDEX_PATTERN = re.compile(r"-?[0-9]+")


# ============================================================
# 响应辅助类
# ============================================================

class Response:
    """HTTP 响应封装"""

    def __init__(
        self,
        body: bytes,
        status: HTTPStatus = HTTPStatus.OK,
        content_type: str = "text/html",
        headers: Optional[Dict[str, str]] = None
    ):
        self.body = body
        self.status = status
        self.content_type = content_type
        self.headers = dict(headers or {})

    def send(self, handler: 'BaseHTTPRequestHandler') -> None:
        """发送响应到客户端"""
        handler.send_response(self.status)
        handler.send_header("Content-Type", self.content_type)
        for name, value in self.headers.items():
            handler.send_header(name, value)
        handler.send_header("Content-Length", str(len(self.body)))
        handler.end_headers()
        handler.wfile.write(self.body)


class RawJsonResponse(Response):
    """JSON 响应封装，正文为已序列化的文本，原样发送"""

    def __init__(
        self,
        text: str,
        status: HTTPStatus = HTTPStatus.OK
    ):
        super().__init__(
            body=text.encode("utf-8"),
            status=status,
            content_type="application/json"
        )


class HtmlResponse(Response):
    """HTML 响应封装"""

    def __init__(
        self,
        body: bytes,
        status: HTTPStatus = HTTPStatus.OK,
        headers: Optional[Dict[str, str]] = None
    ):
        super().__init__(
            body=body,
            status=status,
            content_type="text/html",
            headers=headers
        )


# ============================================================
# 站点处理器
# ============================================================

class SiteHandler:
    """站点请求处理器，持有只读的 SiteContext"""

    def __init__(self, context: SiteContext):
        self.context = context

    def handle_overview(self) -> Response:
        """处理总览页 GET / 和 GET /overview"""
        body = render_overview(self.context)
        return HtmlResponse(body.encode("utf-8"))

    def handle_product(self, query: Dict[str, List[str]]) -> Response:
        """
        处理商品详情 GET /product?id=xxx

        id 缺失、非整数或越界时返回 400。
        """
        id_list = query.get("id", [])
        if not id_list or not id_list[0].strip():
            return self._bad_request("缺少必填参数: id")

        raw_id = id_list[0].strip()
        if not _INDEX_PATTERN.fullmatch(raw_id):
            return self._bad_request(f"无效的商品 id: {raw_id}")
        index = int(raw_id)

        count = len(self.context.records)
        if not 0 <= index < count:
            return self._bad_request(f"商品 id 越界: {index} (共 {count} 条)")

        body = render_product(self.context, index)
        return HtmlResponse(body.encode("utf-8"))

    def handle_api(self) -> Response:
        """处理 GET /api，原样返回 data.json"""
        return RawJsonResponse(self.context.raw_json)

    def handle_not_found(self) -> Response:
        """未匹配路由：固定 404 正文与自定义响应头"""
        name, value = CUSTOM_HEADER
        return HtmlResponse(
            NOT_FOUND_BODY.encode("utf-8"),
            status=HTTPStatus.NOT_FOUND,
            headers={name: value}
        )

    @staticmethod
    def _bad_request(message: str) -> Response:
        logger.info(f"[SiteHandler] 400 Bad Request: {message}")
        body = render_error_page(400, "Bad request", message)
        return HtmlResponse(body, status=HTTPStatus.BAD_REQUEST)
