# cli.py
import json

import typer

from scalp_analyzer.config import load_config
from scalp_analyzer.errors import ScalpAnalyzerError
from scalp_analyzer.log import setup_logging
from scalp_analyzer.ocr.engine import OcrEngine
from scalp_analyzer.pipeline import read_axis, scalp

app = typer.Typer()


def _fail(err: Exception) -> None:
    print(json.dumps({"success": False, "error": str(err)}, indent=2))
    raise typer.Exit(code=1)


@app.command("scalp")
def scalp_cmd(
    path: str,
    output_dir: str = typer.Option(None, help="Where the annotated PNG goes."),
    env_file: str = typer.Option(None, help="Optional .env with overrides."),
):
    """Read levels off a chart screenshot and print the scalp signal."""
    try:
        config = load_config(env_file)
        setup_logging(config.log_level)
        with OcrEngine(config.ocr_engine, timeout=config.ocr_timeout_s) as engine:
            result = scalp(path, engine, config, output_dir=output_dir)
    except (ScalpAnalyzerError, FileNotFoundError, ValueError) as e:
        _fail(e)
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


@app.command()
def ticks(
    path: str,
    env_file: str = typer.Option(None, help="Optional .env with overrides."),
):
    """OCR the price axis only; handy when tuning the tick price band."""
    try:
        config = load_config(env_file)
        setup_logging(config.log_level)
        with OcrEngine(config.ocr_engine, timeout=config.ocr_timeout_s) as engine:
            mapping = read_axis(path, engine, config)
    except (ScalpAnalyzerError, FileNotFoundError, ValueError) as e:
        _fail(e)
    info = {
        "ticks": list(mapping.ticks),
        "minPrice": mapping.min_price,
        "maxPrice": mapping.max_price,
        "height": mapping.height,
    }
    print(json.dumps(info, indent=2))


if __name__ == "__main__":
    app()
