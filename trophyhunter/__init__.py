# trophyhunter/__init__.py
"""
Steam Trophy Hunter: личный трекер прогресса ачивок.
Ядро (store, codec, фильтры, синхронизация): в ``trophyhunter.core``,
HTTP-обвязка: в ``trophyhunter.api``.
"""
__version__ = "0.3.0"
