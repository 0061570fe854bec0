from dataclasses import dataclass


DB_HOST = '127.0.0.1'
DB_USER = 'root'
DB_PASSWORD = ''
DB_NOME = 'pdv_pix'
DB_POOL_NOME = 'pdv_pix_pool'
DB_POOL_TAMANHO = 5

LOG_DIR = 'logs'
LOG_ARQUIVO = 'app.log'

LIMITE_PADRAO = '100 per hour'
LIMITE_GERACAO = '300 per hour'

NOME_RECEBEDOR_PADRAO = 'ROTI PAOLA'
CIDADE_RECEBEDOR_PADRAO = 'SAO PAULO'
TXID_PADRAO = '***'

MAX_NOME_RECEBEDOR = 25
MAX_CIDADE_RECEBEDOR = 15
MAX_TAMANHO_CAMPO = 99
# 26 = 0014br.gov.bcb.pix (18) + 01NN (4) + chave
MAX_CHAVE_PIX = MAX_TAMANHO_CAMPO - 18 - 4

TIPOS_CHAVE_PIX = ('aleatoria', 'telefone', 'cpf', 'cnpj', 'email')


def _booleano(valor):
    if isinstance(valor, str):
        return valor.strip().lower() in ('1', 'true', 'sim', 'yes', 'on')
    return bool(valor)


@dataclass(frozen=True)
class ConfiguracaoPix:
    '''
    Valores padrão do recebedor usados quando a solicitação não informa
    nome, cidade ou txid.
    '''
    nome_recebedor: str = NOME_RECEBEDOR_PADRAO
    cidade_recebedor: str = CIDADE_RECEBEDOR_PADRAO
    txid: str = TXID_PADRAO
    estrito: bool = False
    transliterar: bool = False

    @classmethod
    def from_mapping(cls, mapping):
        return cls(
            nome_recebedor=mapping.get('PIX_NOME_RECEBEDOR') or NOME_RECEBEDOR_PADRAO,
            cidade_recebedor=mapping.get('PIX_CIDADE_RECEBEDOR') or CIDADE_RECEBEDOR_PADRAO,
            txid=mapping.get('PIX_TXID') or TXID_PADRAO,
            estrito=_booleano(mapping.get('PIX_ESTRITO', False)),
            transliterar=_booleano(mapping.get('PIX_TRANSLITERAR', False))
        )
