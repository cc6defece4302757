"""Operations over the PLANKA API: CRUD calls plus the aggregate views built on them."""
