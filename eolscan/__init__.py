"""
eolscan - Azure VM 운영체제 EOL 인벤토리

테넌트의 모든 구독에서 VM을 수집하고, OS 이미지 SKU를 endoflife.date
릴리스 캘린더와 대조하여 지원 상태를 분류한 뒤 CSV/Excel로 출력합니다.
"""

__version__ = "0.3.0"
