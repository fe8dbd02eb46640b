# doglog/models/__init__.py
