# -*- coding: utf-8 -*-
"""
===================================
Storefront 入口文件
===================================

启动顺序：
1. 读取配置（环境变量 / .env）
2. 执行启动文件流水线（可通过 FILE_PIPELINE_ENABLED 关闭）
3. 一次性加载模板与商品数据
4. 在 127.0.0.1:PORT 上提供服务

Endpoints:
  GET  /, /overview     - 商品总览
  GET  /product?id=xxx  - 商品详情
  GET  /api             - 商品原始 JSON

Usage:
  python webui.py
  PORT=3000 python webui.py
"""

from __future__ import annotations

import logging

from storefront.config import Config, ConfigError
from storefront.file_pipeline import FilePipelineError, PipelinePaths, run_startup_pipeline
from web.router import Router
from web.server import WebServer
from web.services import SiteLoadError, load_site_context

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%H:%M:%S'
    )


def main() -> int:
    """
    主入口函数

    启动阶段任何文件错误都会在绑定端口之前终止进程。
    """
    try:
        config = Config.get_instance()
    except ConfigError as e:
        setup_logging("INFO")
        logger.error(f"配置错误: {e}")
        return 1

    setup_logging(config.log_level)

    try:
        if config.file_pipeline_enabled:
            run_startup_pipeline(PipelinePaths(config.txt_dir))
        context = load_site_context(config.templates_dir, config.data_file)
    except (FilePipelineError, SiteLoadError) as e:
        logger.error(f"启动失败: {e}")
        return 1

    server = WebServer(Router(context), host=config.host, port=config.port)
    server.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
