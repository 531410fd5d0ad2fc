"""link_harvester.report: сохранение итогового отчёта о сборе ссылок."""

from link_harvester.report.json_report import render_json

__all__ = ["render_json"]
