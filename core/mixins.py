class OwnedQuerysetMixin:
    """
    Mixin for ViewSets over per-user records.

    Restricts the queryset to rows owned by the requesting user, so another
    user's record resolves to 404 rather than 403.
    """

    owner_field = "user"

    def get_queryset(self):
        return super().get_queryset().filter(**{self.owner_field: self.request.user})

    def perform_create(self, serializer):
        serializer.save(**{self.owner_field: self.request.user})
