from io import BytesIO
from pdv_pix.log import configurar_logging
import base64
import logging
import qrcode


configurar_logging()
logger = logging.getLogger(__name__)


def gerar_imagem_qr(payload: str, box_size: int = 10, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color='black', back_color='white')

    buffer = BytesIO()
    img.save(buffer, format='PNG')

    logger.debug(f'QR Code PNG gerado com versão {qr.version}.')
    return buffer.getvalue()


def gerar_imagem_qr_base64(payload: str, **kwargs) -> str:
    return base64.b64encode(gerar_imagem_qr(payload, **kwargs)).decode('ascii')
