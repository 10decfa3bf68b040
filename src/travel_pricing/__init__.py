# 💸 travel_pricing/__init__.py
"""
💸 travel_pricing — рушій ціноутворення турагенції: маркап, конвертація, податки.

Пакети:
- `domain` — правила, резолвер маркапу, податки, розбивка ціни, bulk-операції.
- `infrastructure` — конвертер валют, провайдери курсів, сховище правил.
- `config` — ConfigService та DI-контейнер.
"""

__version__ = "0.1.0"
