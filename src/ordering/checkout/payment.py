"""Payment methods offered at checkout.

Payment itself happens outside the storefront (e-wallet transfer or cash);
the order message only names the chosen method and, for transfer methods,
reminds the customer to attach the receipt.
"""

from protean.fields import String, Text

from ordering.domain import ordering


@ordering.value_object
class PaymentMethod:
    id: String(required=True, sanitize=False)
    name: String(required=True, sanitize=False)
    account_number: String(max_length=50, sanitize=False)
    account_name: String(sanitize=False)
    qr_code_url: Text(sanitize=False)

    @property
    def needs_receipt(self) -> bool:
        """Transfer methods (account number or QR code) expect a payment screenshot."""
        return bool(self.account_number or self.qr_code_url)


def find_payment_method(methods, method_id):
    return next((method for method in methods if method.id == method_id), None)
