def next_version(store_id, tenant_id):
    from storefront.models.store_version import StoreVersion

    last = (
        StoreVersion.query
        .filter_by(store_id=store_id, tenant_id=tenant_id)
        .order_by(StoreVersion.version.desc())
        .first()
    )
    return (last.version + 1) if last else 1
