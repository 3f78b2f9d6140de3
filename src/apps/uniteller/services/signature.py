"""Подписи запросов Uniteller.

Форма оплаты подписывается цепочкой MD5 по отдельным полям, уведомления
Uniteller подписываются MD5 от конкатенации Order_ID + Status + пароль.
"""

import hashlib
import hmac


def get_md5(value: str) -> str:
    """MD5 строки в виде hex в нижнем регистре."""
    return hashlib.md5(value.encode("utf-8")).hexdigest()


EMPTY_MD5 = get_md5("")


def build_payment_signature(
    shop_idp: str,
    order_idp: str,
    subtotal: str,
    customer_idp: str,
    password: str,
) -> str:
    """
    Подпись формы оплаты.

    Пустые поля формы (срок жизни, описание и т.п.) участвуют
    в подписи как MD5 пустой строки.
    """
    parts = [
        get_md5(shop_idp),
        get_md5(order_idp),
        get_md5(subtotal),
        EMPTY_MD5,
        EMPTY_MD5,
        EMPTY_MD5,
        get_md5(customer_idp),
        EMPTY_MD5,
        EMPTY_MD5,
        EMPTY_MD5,
        get_md5(password),
    ]
    return get_md5("&".join(parts)).upper()


def build_callback_signature(order_id: str, status: str, password: str) -> str:
    """Ожидаемая подпись уведомления об оплате."""
    return get_md5(order_id + status + password).upper()


def verify_callback_signature(
    order_id: str,
    status: str,
    password: str,
    signature: str,
) -> bool:
    expected = build_callback_signature(order_id, status, password)
    return hmac.compare_digest(
        expected.encode("utf-8"),
        (signature or "").encode("utf-8"),
    )
