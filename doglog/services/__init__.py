# doglog/services/__init__.py
