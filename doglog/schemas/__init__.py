# doglog/schemas/__init__.py
