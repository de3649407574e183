"""
命令行入口

    yaml-cv -i data.yaml -s style.txt -o output.pdf
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import LoggingConfig, get_config
from .interfaces import YamlCVError
from .pipeline import CVExecutor

logger = logging.getLogger(__name__)


def setup_logging(config: LoggingConfig) -> None:
    """按运行期配置初始化日志"""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_to_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yaml-cv",
        description="Render a CV (rirekisho) PDF from a YAML data file and a style script.",
    )
    parser.add_argument(
        "-i",
        "--input",
        default="data.yaml",
        help="数据文件（默认：data.yaml）",
    )
    parser.add_argument(
        "-s",
        "--style",
        default="style.txt",
        help="样式脚本（默认：style.txt）",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="output.pdf",
        help="输出PDF（默认：output.pdf）",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config()
    setup_logging(config.logging)

    try:
        CVExecutor(config).execute(Path(args.input), Path(args.style), Path(args.output))
    except YamlCVError:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
