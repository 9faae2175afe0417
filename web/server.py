# -*- coding: utf-8 -*-
"""
===================================
Web 服务器核心
===================================

职责：
1. 启动 HTTP 服务器
2. 将请求交给路由器
3. 提供后台运行接口（测试使用）
"""

from __future__ import annotations

import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional, Type

from storefront.config import DEFAULT_PORT, HOST
from web.router import Router

logger = logging.getLogger(__name__)


# ============================================================
# HTTP 请求处理器
# ============================================================

class WebRequestHandler(BaseHTTPRequestHandler):
    """
    HTTP 请求处理器

    将请求分发到路由器处理
    """

    # 类级别的路由器引用
    router: Router = None  # type: ignore

    def do_GET(self) -> None:
        """处理 GET 请求"""
        self.router.dispatch(self, "GET")

    def log_message(self, fmt: str, *args) -> None:
        """访问日志走 logging 而非 stderr"""
        logger.debug(f"[WebServer] {self.address_string()} - {fmt % args}")


# ============================================================
# Web 服务器
# ============================================================

class WebServer:
    """
    Web 服务器

    封装 ThreadingHTTPServer，提供启动和管理接口

    使用方式：
        # 前台运行
        server = WebServer(router)
        server.run()

        # 后台运行
        server = WebServer(router, port=0)
        server.start_background()
    """

    def __init__(
        self,
        router: Router,
        host: str = HOST,
        port: int = DEFAULT_PORT
    ):
        """
        初始化 Web 服务器

        Args:
            router: 路由器实例
            host: 监听地址
            port: 监听端口（0 表示由系统分配）
        """
        self.host = host
        self.port = port
        self.router = router

        self._server: Optional[ThreadingHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self) -> str:
        """服务器地址（已绑定时使用实际端口）"""
        port = self._server.server_address[1] if self._server else self.port
        return f"http://{self.host}:{port}"

    def _create_handler_class(self) -> Type[WebRequestHandler]:
        """创建带路由器引用的处理器类"""
        router = self.router

        class Handler(WebRequestHandler):
            pass

        Handler.router = router
        return Handler

    def _create_server(self) -> ThreadingHTTPServer:
        """创建 HTTP 服务器实例"""
        handler_class = self._create_handler_class()
        return ThreadingHTTPServer((self.host, self.port), handler_class)

    def _log_routes(self) -> None:
        routes = self.router.list_routes()
        logger.info("已注册路由:")
        for method, path, desc in routes:
            logger.info(f"  {method:6} {path:20} - {desc}")

    def run(self) -> None:
        """
        前台运行服务器（阻塞）

        按 Ctrl+C 退出
        """
        self._server = self._create_server()

        logger.info(f"[WebServer] 服务启动: {self.address}")
        self._log_routes()

        try:
            self._server.serve_forever()
        except KeyboardInterrupt:
            logger.info("[WebServer] 收到退出信号，服务器关闭")
        finally:
            self._server.server_close()
            self._server = None

    def start_background(self) -> threading.Thread:
        """
        后台运行服务器（非阻塞）

        Returns:
            服务器线程
        """
        self._server = self._create_server()
        server = self._server

        def serve():
            logger.info(f"[WebServer] 后台启动: {self.address}")
            try:
                server.serve_forever()
            except Exception as e:
                logger.error(f"[WebServer] 发生错误: {e}")
                raise

        self._thread = threading.Thread(target=serve, daemon=True)
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        """停止服务器"""
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
            logger.info("[WebServer] 服务已停止")
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    def is_running(self) -> bool:
        """检查服务器是否运行中"""
        return self._server is not None
