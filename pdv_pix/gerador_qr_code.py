from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union
from pdv_pix.config import (ConfiguracaoPix,
                            MAX_NOME_RECEBEDOR,
                            MAX_CIDADE_RECEBEDOR,
                            MAX_TAMANHO_CAMPO,
                            MAX_CHAVE_PIX)
from pdv_pix.error import (ChaveInvalida,
                           ValorMuitoLongo,
                           ValorInvalido,
                           ValorNegativo)
from pdv_pix.log import configurar_logging
import crcmod
import logging
import unicodedata


configurar_logging()
logger = logging.getLogger(__name__)


GUI_PIX = 'br.gov.bcb.pix'
PREFIXO_CRC = '6304'

_crc16_ccitt_false = crcmod.mkCrcFun(
    0x11021, initCrc=0xFFFF, rev=False, xorOut=0x0000)


@dataclass(frozen=True)
class SolicitacaoPix:
    chave_pix: str
    nome_recebedor: Optional[str] = None
    cidade_recebedor: Optional[str] = None
    valor: Optional[Union[Decimal, float, int]] = None
    txid: Optional[str] = None


def formatar_campo(id_: str, valor: str) -> str:
    if len(valor) > MAX_TAMANHO_CAMPO:
        raise ValorMuitoLongo(
            f'Campo {id_} com {len(valor)} caracteres (máximo {MAX_TAMANHO_CAMPO}).')

    tamanho = f"{len(valor):02d}"
    return f"{id_}{tamanho}{valor}"


def calcular_crc16(payload: str) -> str:
    unidades = payload.encode('utf-16-be', 'surrogatepass')[1::2]
    crc = _crc16_ccitt_false(unidades)
    return f"{crc:04X}"


def remover_acentos(texto: str) -> str:
    return ''.join(
        c for c in unicodedata.normalize('NFKD', texto)
        if not unicodedata.combining(c)
    )


def formatar_valor(valor) -> Optional[str]:
    '''
    Converte o valor da transação para o campo 54 (duas casas, ponto
    decimal). Retorna None quando o campo deve ser omitido.
    '''
    if valor is None:
        return None

    try:
        decimal = valor if isinstance(valor, Decimal) else Decimal(valor)
    except (InvalidOperation, TypeError, ValueError):
        raise ValorInvalido(f'Valor não numérico: {valor!r}')

    if not decimal.is_finite():
        raise ValorInvalido(f'Valor não finito: {valor!r}')

    if decimal < 0:
        raise ValorNegativo(f'Valor negativo: {valor!r}')

    if decimal == 0:
        return None

    return str(decimal.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


def _validar_chave(chave_pix, estrito):
    if not estrito:
        return

    if chave_pix is None or not chave_pix.strip():
        raise ChaveInvalida('Chave PIX ausente.')

    if len(chave_pix) > MAX_CHAVE_PIX:
        raise ChaveInvalida(
            f'Chave PIX com {len(chave_pix)} caracteres (máximo {MAX_CHAVE_PIX}).')


def _campo_valor(valor, estrito):
    try:
        return formatar_valor(valor)
    except ValorInvalido as erro:
        if estrito:
            raise
        logger.warning(f'Campo 54 omitido: {str(erro)}')
        return None


def gerar_payload_pix(
        solicitacao: SolicitacaoPix,
        config: Optional[ConfiguracaoPix] = None
) -> str:
    '''
    Gera payload PIX Cópia e Cola estático conforme padrão BACEN (EMV-Co)
    '''
    config = config or ConfiguracaoPix()

    _validar_chave(solicitacao.chave_pix, config.estrito)

    chave = solicitacao.chave_pix or ''
    nome = solicitacao.nome_recebedor or config.nome_recebedor
    cidade = solicitacao.cidade_recebedor or config.cidade_recebedor
    txid = solicitacao.txid or config.txid

    if config.transliterar:
        nome = remover_acentos(nome)
        cidade = remover_acentos(cidade)

    valor = _campo_valor(solicitacao.valor, config.estrito)

    campos = [
        formatar_campo("00", "01"),
        formatar_campo(
            "26",
            formatar_campo("00", GUI_PIX) +
            formatar_campo("01", chave)
        ),
        formatar_campo("52", "0000"),
        formatar_campo("53", "986")
    ]

    if valor is not None:
        campos.append(formatar_campo("54", valor))

    campos += [
        formatar_campo("58", "BR"),
        formatar_campo("59", nome[:MAX_NOME_RECEBEDOR]),
        formatar_campo("60", cidade[:MAX_CIDADE_RECEBEDOR]),
        formatar_campo("62", formatar_campo("05", txid))
    ]

    payload_crc = ''.join(campos) + PREFIXO_CRC
    crc = calcular_crc16(payload_crc)

    logger.debug(f'Payload PIX gerado para chave={chave!r} crc={crc}')
    return payload_crc + crc
