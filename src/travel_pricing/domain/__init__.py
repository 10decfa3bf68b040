# 🏭 travel_pricing/domain/__init__.py
"""
🏭 Доменний шар рушія: правила, маркап, валюти, податки, розбивка ціни, bulk-операції.
"""
