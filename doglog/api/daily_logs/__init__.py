# doglog/api/daily_logs/__init__.py
