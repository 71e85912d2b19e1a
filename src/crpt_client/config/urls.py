from __future__ import annotations

DEFAULT_BASE_URL = "https://ismp.crpt.ru"


def get_documents_create_url(base_url: str = DEFAULT_BASE_URL) -> str:
	return f"{base_url.rstrip('/')}/api/v3/lk/documents/create"


DOCUMENTS_CREATE_URL = get_documents_create_url()
