from typing import NewType

TodoId = NewType("TodoId", int)
