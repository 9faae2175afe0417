# -*- coding: utf-8 -*-
"""
===================================
Web 服务层 - 站点数据加载
===================================

职责：
1. 启动时一次性读取三个 HTML 模板片段
2. 读取并校验商品 JSON 数据
3. 构造只读的 SiteContext，供路由器使用
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

OVERVIEW_TEMPLATE = "template-overview.html"
CARD_TEMPLATE = "template-card.html"
PRODUCT_TEMPLATE = "template-product.html"

# data.json 必须是对象数组
_RECORDS_ADAPTER = TypeAdapter(List[Dict[str, Any]])


class SiteLoadError(Exception):
    """站点文件读取或解析失败"""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class SiteContext:
    """
    站点上下文（启动后只读）

    Attributes:
        overview_template: 总览页模板
        card_template: 商品卡片模板
        product_template: 商品详情页模板
        records: 商品记录，保持 JSON 中的顺序
        raw_json: data.json 原始文本，/api 原样返回
    """

    overview_template: str
    card_template: str
    product_template: str
    records: Tuple[Mapping[str, Any], ...]
    raw_json: str

    @classmethod
    def build(
        cls,
        overview_template: str,
        card_template: str,
        product_template: str,
        raw_json: str,
        source: Path = Path("<memory>")
    ) -> 'SiteContext':
        """由已读取的文本构造上下文，解析并冻结商品记录"""
        return cls(
            overview_template=overview_template,
            card_template=card_template,
            product_template=product_template,
            records=parse_records(raw_json, source),
            raw_json=raw_json,
        )


def parse_records(raw_json: str, source: Path) -> Tuple[Mapping[str, Any], ...]:
    """
    解析商品数据

    Args:
        raw_json: JSON 文本
        source: 来源文件（仅用于错误信息）

    Raises:
        SiteLoadError: JSON 非法或不是对象数组
    """
    try:
        records = _RECORDS_ADAPTER.validate_json(raw_json)
    except ValidationError as e:
        raise SiteLoadError(source, f"商品数据格式错误: {e.error_count()} 处校验失败") from e

    return tuple(MappingProxyType(record) for record in records)


def _read(path: Path) -> str:
    """按字节读取后严格解码，不做换行转换"""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SiteLoadError(path, e.strerror or str(e)) from e
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SiteLoadError(path, f"非法 UTF-8 编码: {e.reason} (位置 {e.start})") from e


def load_site_context(templates_dir: Path, data_file: Path) -> SiteContext:
    """
    读取模板与数据，构造站点上下文

    任何文件缺失都会抛出 SiteLoadError，服务不应在缺少模板时启动。
    """
    overview = _read(templates_dir / OVERVIEW_TEMPLATE)
    card = _read(templates_dir / CARD_TEMPLATE)
    product = _read(templates_dir / PRODUCT_TEMPLATE)
    raw_json = _read(data_file)

    context = SiteContext.build(overview, card, product, raw_json, source=data_file)
    logger.info(f"[SiteContext] 已加载 {len(context.records)} 条商品记录: {data_file}")
    return context
