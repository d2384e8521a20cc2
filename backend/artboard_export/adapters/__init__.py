"""
文档适配器 - IDocument 的具体实现

子模块：
- file_document: YAML/JSON 文档文件
"""

from .file_document import FileDocument, load_document

__all__ = [
    "FileDocument",
    "load_document",
]
