"""
eolscan/cli - 명령줄 인터페이스
"""
