# 🧱 travel_pricing/infrastructure/__init__.py
"""
🧱 Інфраструктурний шар: конвертер валют, провайдери курсів, сховище правил.
"""
