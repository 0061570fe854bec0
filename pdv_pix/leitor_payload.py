from dataclasses import dataclass
from typing import List
from pdv_pix.error import PayloadInvalido, CrcInvalido
from pdv_pix.gerador_qr_code import calcular_crc16, PREFIXO_CRC, GUI_PIX
from pdv_pix.log import configurar_logging
import logging
import re


configurar_logging()
logger = logging.getLogger(__name__)


HEX_CRC = re.compile(r'^[0-9A-F]{4}$')


@dataclass(frozen=True)
class CampoEmv:
    id: str
    valor: str

    @property
    def tamanho(self) -> int:
        return len(self.valor)

    def codificar(self) -> str:
        return f"{self.id}{self.tamanho:02d}{self.valor}"


def ler_campos(texto: str) -> List[CampoEmv]:
    campos = []
    posicao = 0

    while posicao < len(texto):
        cabecalho = texto[posicao:posicao + 4]
        if len(cabecalho) < 4:
            raise PayloadInvalido(f'Cabeçalho truncado na posição {posicao}.')

        id_, tamanho = cabecalho[:2], cabecalho[2:]
        if not id_.isdigit() or not tamanho.isdigit():
            raise PayloadInvalido(
                f'Cabeçalho não numérico {cabecalho!r} na posição {posicao}.')

        inicio = posicao + 4
        fim = inicio + int(tamanho)
        if fim > len(texto):
            raise PayloadInvalido(
                f'Campo {id_} ultrapassa o fim do payload.')

        campos.append(CampoEmv(id_, texto[inicio:fim]))
        posicao = fim

    return campos


def _como_dict(campos):
    return {c.id: c.valor for c in campos}


def validar_payload(payload: str) -> dict:
    '''
    Confere prefixo, campo 63 e CRC16 de um payload PIX estático e devolve
    os dados decodificados.
    '''
    if not payload or not payload.startswith('000201'):
        raise PayloadInvalido('Payload deve começar com 000201.')

    campos = ler_campos(payload)
    ultimo = campos[-1]

    if ultimo.id != '63' or not HEX_CRC.match(ultimo.valor):
        raise PayloadInvalido('Payload deve terminar com campo 63 de 4 dígitos hex.')

    esperado = calcular_crc16(payload[:-4])
    if esperado != ultimo.valor:
        logger.warning(
            f'CRC16 divergente: recebido={ultimo.valor} esperado={esperado}')
        raise CrcInvalido(
            f'Recebido {ultimo.valor}, esperado {esperado}.')

    dados = _como_dict(campos)
    conta = _como_dict(ler_campos(dados.get('26', '')))
    adicionais = _como_dict(ler_campos(dados.get('62', '')))

    if conta.get('00', '').lower() != GUI_PIX:
        raise PayloadInvalido('Campo 26 não pertence ao arranjo br.gov.bcb.pix.')

    return {
        'chave_pix': conta.get('01', ''),
        'nome_recebedor': dados.get('59'),
        'cidade_recebedor': dados.get('60'),
        'valor': dados.get('54'),
        'moeda': dados.get('53'),
        'pais': dados.get('58'),
        'txid': adicionais.get('05'),
        'crc': ultimo.valor
    }
