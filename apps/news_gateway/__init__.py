"""News Gateway Service.

생성형 텍스트 서비스와 뉴스 피드 앞단의 요청 게이트웨이.
"""
