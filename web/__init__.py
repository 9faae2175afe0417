# -*- coding: utf-8 -*-
"""
===================================
Web 服务模块
===================================

分层架构：
- server.py    - HTTP 服务器核心
- router.py    - 路由匹配与分发
- handlers.py  - 请求处理器
- services.py  - 模板与商品数据加载
- templates.py - 占位符替换与页面生成

使用方式：
    from web import Router, WebServer, load_site_context

    context = load_site_context(templates_dir, data_file)
    server = WebServer(Router(context), port=8000)
    server.run()
"""

from web.router import Router
from web.server import WebServer
from web.services import SiteContext, SiteLoadError, load_site_context

__all__ = [
    'Router',
    'WebServer',
    'SiteContext',
    'SiteLoadError',
    'load_site_context',
]
