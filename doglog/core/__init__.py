# doglog/core/__init__.py
