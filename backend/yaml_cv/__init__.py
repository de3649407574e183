"""
yaml-cv - 由样式脚本与YAML数据生成履历书PDF

模块结构：
- config/     运行期配置与数据加载
- models/     数据模型定义（几何/命令/履历数据）
- style/      样式脚本解析与变量绑定
- render/     渲染引擎与PDF输出
- pipeline/   流水线编排
- cli         命令行入口
"""

__version__ = "0.1.0"
