from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

# Decimals stay exact in Python and go out as JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
