from .crud_inquiry import (
    create_inquiry,
    get_inquiry,
    get_inquiries,
    update_inquiry,
    delete_inquiry,
    mark_quoted,
    mark_accepted,
)
from . import crud_inquiry
