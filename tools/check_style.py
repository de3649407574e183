import argparse
from pathlib import Path

from yaml_cv.interfaces import StyleError, YamlCVError
from yaml_cv.style import StyleParser


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Parse a style script and list its commands (no data/fonts needed)."
    )
    parser.add_argument(
        "style",
        nargs="?",
        default="style.txt",
        help="样式脚本（默认：style.txt）",
    )
    args = parser.parse_args()

    try:
        commands = StyleParser().parse_file(Path(args.style))
    except StyleError as exc:
        print(f"{args.style}: {exc}")
        return 1
    except YamlCVError as exc:
        print(f"ERROR {exc}")
        return 1

    counts: dict[str, int] = {}
    for command in commands:
        counts[command.kind] = counts.get(command.kind, 0) + 1
        print(f"第{command.line_no:>4}行 {command.kind}: {command.model_dump(exclude={'kind', 'line_no'})}")

    summary = ", ".join(f"{kind}={n}" for kind, n in sorted(counts.items()))
    print(f"共 {len(commands)} 条命令 ({summary})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
