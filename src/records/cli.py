#!/usr/bin/env python3
"""
記録管理CLI - 日々の活動記録をターミナルから操作するインターフェース

Usage:
    python -m src.records list [--date YYYY-MM-DD] [--oldest-first] [--format json|text]
    python -m src.records add --text "本文" [--date YYYY-MM-DD] [--image-file PATH]
    python -m src.records edit --id ID --text "新しい本文"
    python -m src.records move --id ID --date YYYY-MM-DD
    python -m src.records delete --id ID
    python -m src.records summary [--date YYYY-MM-DD] [--format json|text]
    python -m src.records calendar --year YYYY --month M
"""

from __future__ import annotations

import argparse
import base64
import json
import mimetypes
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from src.journal import analyze, build_month_grid, month_label

from .exceptions import RecordValidationError
from .models import Record
from .repository import RecordRepository

WEEKDAY_HEADER = "Su Mo Tu We Th Fr Sa"


def format_record_text(record: Record) -> str:
    """記録をテキスト形式で整形"""
    text = record.text.strip() or "(image only)"
    image = " [image]" if record.image_data else ""
    return f"[{record.id}] {record.date} {record.timestamp} | {text}{image}"


def format_record_json(record: Record) -> Dict[str, Any]:
    """記録を辞書形式に変換（画像本体は含めない）"""
    payload = record.to_dict()
    payload["has_image"] = payload.pop("image_data") is not None
    return payload


def _emit(record: Record, output_format: str, prefix: str = "") -> None:
    if output_format == "json":
        print(json.dumps(format_record_json(record), ensure_ascii=False))
    else:
        print(f"{prefix}{format_record_text(record)}")


def load_image(path: str) -> str:
    """画像ファイルをdata URL形式の文字列に変換"""
    file_path = Path(path)
    mime = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
    encoded = base64.b64encode(file_path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def render_calendar(year: int, month: int, dates_with_records: set[str]) -> str:
    """記録のある日に*を付けた月間カレンダー文字列"""
    lines = [month_label(year, month).center(len(WEEKDAY_HEADER)).rstrip(), WEEKDAY_HEADER]
    cells = build_month_grid(year, month, dates_with_records)
    for start in range(0, len(cells), 7):
        week = cells[start : start + 7]
        parts = []
        for cell in week:
            if cell is None:
                parts.append("  ")
            else:
                parts.append(f"{cell.day:>2}")
        line = " ".join(parts)
        marks = [str(cell.day) for cell in week if cell is not None and cell.has_records]
        if marks:
            line += "   * " + ",".join(marks)
        lines.append(line.rstrip())
    return "\n".join(lines)


def cmd_list(
    repo: RecordRepository, target_date: Optional[str], newest_first: bool, output_format: str
) -> int:
    """記録一覧を表示"""
    try:
        items = repo.list_by_date(target_date, newest_first) if target_date else repo.list_all()
    except RecordValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if output_format == "json":
        print(json.dumps([format_record_json(item) for item in items], ensure_ascii=False))
    elif not items:
        print("No records.")
    else:
        for item in items:
            print(format_record_text(item))
    return 0


def cmd_add(
    repo: RecordRepository,
    text: str,
    target_date: Optional[str],
    image_file: Optional[str],
    output_format: str,
) -> int:
    """記録を追加"""
    try:
        image_data = load_image(image_file) if image_file else None
        created = repo.create(text=text.strip(), date=target_date, image_data=image_data)
    except (RecordValidationError, OSError) as exc:
        print(f"Error: failed to add record: {exc}", file=sys.stderr)
        return 1
    _emit(created, output_format, "Added: ")
    return 0


def cmd_edit(repo: RecordRepository, record_id: int, text: str, output_format: str) -> int:
    """記録の本文を編集"""
    try:
        updated = repo.edit_text(record_id, text.strip())
    except RecordValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if not updated:
        print(f"Error: record {record_id} not found.", file=sys.stderr)
        return 1
    _emit(updated, output_format, "Updated: ")
    return 0


def cmd_move(repo: RecordRepository, record_id: int, target_date: str, output_format: str) -> int:
    """記録を別の日に移動"""
    try:
        moved = repo.refile(record_id, target_date)
    except RecordValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if not moved:
        print(f"Error: record {record_id} not found.", file=sys.stderr)
        return 1
    _emit(moved, output_format, "Moved: ")
    return 0


def cmd_delete(repo: RecordRepository, record_id: int, output_format: str) -> int:
    """記録を削除"""
    if not repo.delete(record_id):
        print(f"Error: record {record_id} not found.", file=sys.stderr)
        return 1
    if output_format == "json":
        print(json.dumps({"deleted": True, "id": record_id}))
    else:
        print(f"Deleted: {record_id}")
    return 0


def cmd_summary(repo: RecordRepository, target_date: str, output_format: str) -> int:
    """日次サマリーを表示（ローカル生成のみ）"""
    try:
        summary = analyze(repo.list_by_date(target_date))
    except RecordValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if output_format == "json":
        payload = {"date": target_date, "summary": summary.text, **summary.statistics()}
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(summary.text.rstrip())
    return 0


def cmd_calendar(repo: RecordRepository, year: int, month: int) -> int:
    """月間カレンダーを表示"""
    if not 1 <= month <= 12:
        print(f"Error: month must be between 1 and 12: {month}", file=sys.stderr)
        return 1
    if not 1 <= year <= 9999:
        print(f"Error: year must be between 1 and 9999: {year}", file=sys.stderr)
        return 1
    print(render_calendar(year, month, repo.dates_with_records()))
    return 0


def _add_format(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="出力フォーマット（デフォルト: text）",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """CLIエントリポイント"""
    parser = argparse.ArgumentParser(
        description="Life Tracker 記録管理CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLiteデータベースファイルのパス（デフォルト: data/life_tracker.db）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    parser_list = subparsers.add_parser("list", help="記録一覧を表示")
    parser_list.add_argument("--date", help="対象日付（YYYY-MM-DD形式）")
    parser_list.add_argument("--oldest-first", action="store_true", help="古い順に表示")
    _add_format(parser_list)

    parser_add = subparsers.add_parser("add", help="記録を追加")
    parser_add.add_argument("--text", default="", help="記録の本文")
    parser_add.add_argument("--date", help="所属日（YYYY-MM-DD形式、デフォルト: 今日）")
    parser_add.add_argument("--image-file", help="添付する画像ファイル")
    _add_format(parser_add)

    parser_edit = subparsers.add_parser("edit", help="記録の本文を編集")
    parser_edit.add_argument("--id", type=int, required=True, help="記録ID")
    parser_edit.add_argument("--text", required=True, help="新しい本文")
    _add_format(parser_edit)

    parser_move = subparsers.add_parser("move", help="記録を別の日に移動")
    parser_move.add_argument("--id", type=int, required=True, help="記録ID")
    parser_move.add_argument("--date", required=True, help="移動先の日付（YYYY-MM-DD形式）")
    _add_format(parser_move)

    parser_delete = subparsers.add_parser("delete", help="記録を削除")
    parser_delete.add_argument("--id", type=int, required=True, help="記録ID")
    _add_format(parser_delete)

    parser_summary = subparsers.add_parser("summary", help="日次サマリーを表示")
    parser_summary.add_argument("--date", help="対象日付（YYYY-MM-DD形式、デフォルト: 今日）")
    _add_format(parser_summary)

    today = date.today()
    parser_calendar = subparsers.add_parser("calendar", help="月間カレンダーを表示")
    parser_calendar.add_argument("--year", type=int, default=today.year, help="西暦年")
    parser_calendar.add_argument("--month", type=int, default=today.month, help="月（1-12）")

    args = parser.parse_args(argv)

    repo = RecordRepository(db_path=args.db_path if args.db_path else None)

    if args.command == "list":
        return cmd_list(repo, args.date, not args.oldest_first, args.format)
    elif args.command == "add":
        return cmd_add(repo, args.text, args.date, args.image_file, args.format)
    elif args.command == "edit":
        return cmd_edit(repo, args.id, args.text, args.format)
    elif args.command == "move":
        return cmd_move(repo, args.id, args.date, args.format)
    elif args.command == "delete":
        return cmd_delete(repo, args.id, args.format)
    elif args.command == "summary":
        return cmd_summary(repo, args.date or today.isoformat(), args.format)
    elif args.command == "calendar":
        return cmd_calendar(repo, args.year, args.month)
    else:
        print(f"Error: unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
