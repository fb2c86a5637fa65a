"""
ⒸAngelaMos | 2026
__main__.py
"""
from gtxr.cli import run

if __name__ == "__main__":
    run()
