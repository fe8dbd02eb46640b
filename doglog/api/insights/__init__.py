# doglog/api/insights/__init__.py
