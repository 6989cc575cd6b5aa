def resolve_public_url(base_url: str, object_path: str, fallback_base_url: str) -> str:
    base = base_url.strip() or fallback_base_url
    return f"{base.rstrip('/')}/{object_path.lstrip('/')}"
