"""
Core models package for the asset management backend
"""

from .user_info.perfil import Perfil
from .user_info.usuario import Usuario
from .asset_info.categoria import Categoria
from .asset_info.bem import Bem
from .localizacao import Localizacao
from .movement_info.tipo_movimentacao import TipoMovimentacao
from .movement_info.movimentacao import Movimentacao
