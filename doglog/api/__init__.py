# doglog/api/__init__.py
