"""
アーキテクチャ固有の命令デコーダ群。
"""
