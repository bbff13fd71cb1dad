from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.core.security import decode_jwt
from app.db.session import get_db
from app.models.user import User

STAFF_ROLES = ("ADMIN", "MAJELIS", "EMPLOYEE", "PENDETA")

bearer = HTTPBearer(auto_error=False)

def get_current_user(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    if not creds:
        raise HTTPException(status_code=401, detail="Akses ditolak. Token tidak ditemukan.")
    try:
        claims = decode_jwt(creds.credentials, settings.JWT_SECRET)
    except Exception:
        raise HTTPException(status_code=401, detail="Akses ditolak. Token tidak valid.")
    user_id = str(claims.get("sub") or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Akses ditolak. Token tidak valid.")
    user = db.query(User).options(joinedload(User.majelis)).filter(User.id == user_id).first()
    if user is None or not user.is_active:
        raise HTTPException(status_code=401, detail="Akses ditolak. Pengguna tidak aktif.")
    return user

def require_role(*roles: str):
    def _inner(user: User = Depends(get_current_user)) -> User:
        if str(user.role or "").upper() not in roles:
            raise HTTPException(status_code=403, detail="Akses ditolak. Hak akses tidak mencukupi.")
        return user
    return _inner
