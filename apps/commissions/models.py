# ==========================================
# apps/commissions/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from apps.catalog.pricing import COMPLEXITY_TIERS


class RequestStatus(models.TextChoices):
    REQUESTED = 'Requested', 'Requested'
    DECLINED = 'Declined', 'Declined'
    ACCEPTED = 'Accepted', 'Accepted'
    WORKING = 'Working', 'Working'
    WAITING = 'Waiting', 'Waiting'
    FINISHED = 'Finished', 'Finished'


class CommissionStatus(models.TextChoices):
    ACCEPTED = 'Accepted', 'Accepted'
    WORKING = 'Working', 'Working'
    WAITING = 'Waiting', 'Waiting'
    FINISHED = 'Finished', 'Finished'


# Kanban column order
PIPELINE = [
    RequestStatus.REQUESTED,
    CommissionStatus.ACCEPTED,
    CommissionStatus.WORKING,
    CommissionStatus.WAITING,
    CommissionStatus.FINISHED,
]

# Allowed commission status changes; Working and Waiting alternate while
# the artist waits on client feedback.
STATUS_TRANSITIONS = {
    CommissionStatus.ACCEPTED: {CommissionStatus.WORKING},
    CommissionStatus.WORKING: {CommissionStatus.WAITING, CommissionStatus.FINISHED},
    CommissionStatus.WAITING: {CommissionStatus.WORKING, CommissionStatus.FINISHED},
    CommissionStatus.FINISHED: set(),
}

COMPLEXITY_CHOICES = [(tier, tier) for tier in COMPLEXITY_TIERS]


class Tag(models.Model):
    """Label attached to commissions (style, subject, ...)."""

    name = models.CharField(max_length=50, unique=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'tags'
        ordering = ['name']

    def __str__(self):
        return self.name


class CommissionRequest(models.Model):
    """A not-yet-accepted commission submission."""

    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='commission_requests')
    service = models.ForeignKey('catalog.Service', on_delete=models.PROTECT, related_name='requests')
    description = models.TextField()
    character_count = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    alternative_count = models.PositiveSmallIntegerField(default=0)
    pose_count = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    is_nsfw = models.BooleanField(default=False)
    references = models.JSONField(default=list, blank=True)
    total_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    complexity = models.CharField(max_length=20, choices=COMPLEXITY_CHOICES, default=COMPLEXITY_TIERS[0])
    status = models.CharField(max_length=20, choices=RequestStatus.choices, default=RequestStatus.REQUESTED)
    requested_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'requests'
        indexes = [
            models.Index(fields=['status', 'requested_at'], name='requests_status_idx'),
            models.Index(fields=['user', 'requested_at'], name='requests_user_idx'),
        ]
        ordering = ['-requested_at']

    def __str__(self):
        return f"#{self.pk} {self.service.name} for {self.user.username} ({self.status})"


class CommissionQuerySet(models.QuerySet):

    def visible_to(self, user):
        """
        Commissions the given viewer may see.

        Anonymous viewers never get NSFW commissions unless the artist
        marked them as public work.
        """
        if user is not None and user.is_authenticated:
            return self
        return self.filter(Q(request__is_nsfw=False) | Q(is_public_work=True))


class Commission(models.Model):
    """An accepted, in-progress or completed artwork order."""

    request = models.OneToOneField(CommissionRequest, on_delete=models.CASCADE, related_name='commission')
    status = models.CharField(max_length=20, choices=CommissionStatus.choices, default=CommissionStatus.ACCEPTED)
    progress = models.CharField(max_length=100, blank=True)
    expected_completion_date = models.DateField(null=True, blank=True)
    actual_completion_date = models.DateField(null=True, blank=True)
    complexity = models.CharField(max_length=20, choices=COMPLEXITY_CHOICES, default=COMPLEXITY_TIERS[0])
    is_public_work = models.BooleanField(default=False)
    tags = models.ManyToManyField(Tag, blank=True, related_name='commissions')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CommissionQuerySet.as_manager()

    class Meta:
        db_table = 'commissions'
        indexes = [
            models.Index(fields=['status', 'updated_at'], name='commissions_status_idx'),
            models.Index(fields=['created_at'], name='commissions_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Commission #{self.pk} ({self.status})"

    @property
    def client(self):
        return self.request.user

    @property
    def is_nsfw(self):
        return self.request.is_nsfw

    def can_transition_to(self, status):
        return status in STATUS_TRANSITIONS.get(self.status, set())


class CommissionUpdate(models.Model):
    """Entry in a commission's append-only progress log."""

    commission = models.ForeignKey(Commission, on_delete=models.CASCADE, related_name='updates')
    title = models.CharField(max_length=200, blank=True)
    description = models.TextField(blank=True)
    image_path = models.CharField(max_length=255, blank=True)
    video_path = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'commission_updates'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.title or f"Update #{self.pk}"
