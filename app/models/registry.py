# Imported wherever mappers must be fully configured (app start, alembic, tests).
from app.models.alamat import Alamat
from app.models.baptis import Baptis
from app.models.jemaat import Jemaat
from app.models.keluarga import Keluarga
from app.models.majelis import Majelis
from app.models.pernikahan import Pernikahan
from app.models.rayon import Rayon
from app.models.sidi import Sidi
from app.models.user import User

ALL_MODELS = (Rayon, Alamat, Keluarga, Pernikahan, Jemaat, Majelis, User, Baptis, Sidi)
