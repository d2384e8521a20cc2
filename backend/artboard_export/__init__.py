"""
画板批量导出 - 后端核心模块

模块结构：
- config/      运行期配置加载
- models/      数据模型定义（几何/文档/导出结果）
- visibility/  图层可见性（相交判定/图层树展开/快照/可见性求解）
- export/      导出策略与PDF渲染引擎
- adapters/    文档适配器（YAML/JSON文档文件）
- pipeline/    导出流程编排
- cli          命令行入口
"""

__version__ = "0.1.0"
