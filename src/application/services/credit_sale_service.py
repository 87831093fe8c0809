"""Credit sale service - orchestrates the fiado ledger use cases."""

from datetime import date
from typing import Callable, Optional
from uuid import UUID

import structlog

from src.application.dto import (
    CreateCreditSaleRequest,
    CreditSaleListResponse,
    CreditSaleResponse,
    PayInstallmentRequest,
    PaymentReceipt,
    RefreshResult,
)
from src.domain.entities import (
    Client,
    CreditSale,
    CreditSaleStatus,
    Installment,
    InstallmentStatus,
    RevenueTransaction,
    RevenueType,
)
from src.domain.exceptions import (
    CreditSaleNotFoundException,
    CreditSalesDisabledException,
    ValidationException,
    InstallmentAlreadyPaidException,
    InstallmentNotFoundException,
    InstallmentNotPaidException,
)
from src.domain.interfaces import (
    ClientRepository,
    CreditSaleRepository,
    RevenueRepository,
    SystemSettingsRepository,
)
from src.service.ledger import (
    LedgerSettings,
    apply_resolved_statuses,
    apply_sale_aggregates,
    build_due_dates,
    format_money,
    ledger_settings,
    resolve_installment_status,
    split_amount,
    today_local,
)

from .locks import SaleLockRegistry, sale_locks

logger = structlog.get_logger(__name__)


class CreditSaleService:
    """
    Application service for credit sale use cases.

    Every write path ends by recomputing the sale's derived fields from
    its installments; callers can never set a sale status directly.
    """

    def __init__(
        self,
        credit_sale_repository: CreditSaleRepository,
        revenue_repository: RevenueRepository,
        client_repository: ClientRepository,
        settings_repository: SystemSettingsRepository,
        settings: LedgerSettings = ledger_settings,
        clock: Optional[Callable[[], date]] = None,
        locks: Optional[SaleLockRegistry] = None,
    ):
        self._sale_repo = credit_sale_repository
        self._revenue_repo = revenue_repository
        self._client_repo = client_repository
        self._settings_repo = settings_repository
        self._settings = settings
        self._clock = clock or (lambda: today_local(self._settings))
        self._locks = locks if locks is not None else sale_locks

    async def create_credit_sale(
        self,
        request: CreateCreditSaleRequest,
    ) -> CreditSaleResponse:
        """
        Register a credit sale and its installments.

        Args:
            request: Sale data; amounts in cents

        Returns:
            CreditSaleResponse for the stored sale

        Raises:
            CreditSalesDisabledException: If credit sales are switched off
            ValidationException: If the request breaks a rule
            CreditSaleCreationFailedException: If storage rejected the sale
        """
        if not await self._credit_sales_enabled():
            raise CreditSalesDisabledException()

        errors = request.validate(self._settings.max_installments)
        if errors:
            raise ValidationException(errors)

        today = self._clock()
        client = await self._resolve_client(request.client_id, request.client_name)

        sale = CreditSale(
            client_name=client.display_name if client else request.client_name.strip(),
            client_id=client.id if client else None,
            products=request.products.strip(),
            subtotal_cents=request.subtotal_cents,
            discount_cents=request.discount_cents,
            total_cents=request.total_cents,
            number_of_installments=request.number_of_installments,
            first_due_date=request.first_due_date,
            sale_date=request.sale_date or today,
        )

        amounts = split_amount(sale.total_cents, sale.number_of_installments)
        due_dates = build_due_dates(sale.first_due_date, sale.number_of_installments)

        for number, (amount, due_date) in enumerate(zip(amounts, due_dates), start=1):
            installment = Installment(
                credit_sale_id=sale.id,
                installment_number=number,
                amount_cents=amount,
                due_date=due_date,
            )
            installment.status = resolve_installment_status(installment, today)
            sale.installments.append(installment)

        apply_sale_aggregates(sale)

        await self._sale_repo.add(sale)

        logger.info(
            "credit_sale_created",
            credit_sale_id=str(sale.id),
            client_id=sale.client_id,
            total_cents=sale.total_cents,
            num_installments=sale.number_of_installments,
            status=sale.status.value,
        )

        return CreditSaleResponse.from_entity(sale)

    async def pay_installment(self, request: PayInstallmentRequest) -> CreditSaleResponse:
        """
        Record the payment of one installment.

        The payment, the sale's refreshed totals and the revenue entry are
        written in the same unit of work while the sale's lock is held.

        Raises:
            ValidationException: If the payment method is missing
            InstallmentNotFoundException: If the installment does not exist
            InstallmentAlreadyPaidException: If it was paid before
        """
        errors = request.validate()
        if errors:
            raise ValidationException(errors)

        owner = await self._sale_repo.get_by_installment_id(request.installment_id)
        if owner is None:
            raise InstallmentNotFoundException(str(request.installment_id))

        log = logger.bind(
            credit_sale_id=str(owner.id),
            installment_id=str(request.installment_id),
        )

        async with self._locks.lock_for(owner.id):
            # Re-read under the lock; another payment may have landed
            sale = await self._sale_repo.get_by_id(owner.id, for_update=True)
            if sale is None:
                raise InstallmentNotFoundException(str(request.installment_id))

            installment = sale.find_installment(request.installment_id)
            if installment is None:
                raise InstallmentNotFoundException(str(request.installment_id))
            if installment.is_paid:
                log.warning("installment_already_paid")
                raise InstallmentAlreadyPaidException(str(installment.id))

            today = self._clock()
            paid_date = request.paid_date or today
            payment_method = request.payment_method.strip()

            transitioned = await self._sale_repo.mark_installment_paid(
                installment.id,
                paid_date,
                payment_method,
            )
            if not transitioned:
                log.warning("installment_already_paid")
                raise InstallmentAlreadyPaidException(str(installment.id))

            installment.status = InstallmentStatus.PAID
            installment.paid_date = paid_date
            installment.payment_method = payment_method

            changed = apply_resolved_statuses(sale.installments, today)
            apply_sale_aggregates(sale)
            await self._sale_repo.save_status_refresh(sale, changed)

            await self._revenue_repo.add(
                RevenueTransaction(
                    client_name=sale.client_name,
                    client_id=sale.client_id,
                    description=self._payment_description(sale, installment),
                    date=paid_date,
                    payment_method=payment_method,
                    subtotal_cents=installment.amount_cents,
                    value_cents=installment.amount_cents,
                    type=RevenueType.PRODUCT,
                )
            )

            # Commit before releasing the lock so the next writer of this
            # sale reads the installment set including this payment
            await self._sale_repo.commit()

        log.info(
            "installment_paid",
            installment_number=installment.installment_number,
            amount_cents=installment.amount_cents,
            payment_method=payment_method,
            sale_status=sale.status.value,
            remaining_cents=sale.remaining_cents,
        )

        return CreditSaleResponse.from_entity(sale)

    async def refresh_all_statuses(self, today: Optional[date] = None) -> RefreshResult:
        """
        Re-resolve every open installment and store changed statuses.

        Running twice with the same ``today`` changes nothing the second
        time. Paid sales are skipped, paid installments are terminal.
        """
        today = today or self._clock()
        candidates = await self._sale_repo.list_unpaid()

        sales_updated = 0
        installments_updated = 0

        for candidate in candidates:
            async with self._locks.lock_for(candidate.id):
                sale = await self._sale_repo.get_by_id(candidate.id, for_update=True)
                if sale is not None and sale.status != CreditSaleStatus.PAID:
                    changed = apply_resolved_statuses(sale.installments, today)
                    sale_changed = apply_sale_aggregates(sale)

                    if changed or sale_changed:
                        await self._sale_repo.save_status_refresh(sale, changed)
                        sales_updated += 1
                        installments_updated += len(changed)

                await self._sale_repo.commit()

        logger.info(
            "statuses_refreshed",
            today=today.isoformat(),
            sales_scanned=len(candidates),
            sales_updated=sales_updated,
            installments_updated=installments_updated,
        )

        return RefreshResult(
            today=today.isoformat(),
            sales_scanned=len(candidates),
            sales_updated=sales_updated,
            installments_updated=installments_updated,
        )

    async def get_sale_with_installments(self, sale_id: UUID) -> CreditSaleResponse:
        """
        Retrieve a sale with statuses resolved for today.

        The view is derived on read; nothing is written back.

        Raises:
            CreditSaleNotFoundException: If the sale does not exist
        """
        sale = await self._get_sale(sale_id)
        apply_resolved_statuses(sale.installments, self._clock())
        apply_sale_aggregates(sale)
        return CreditSaleResponse.from_entity(sale)

    async def list_credit_sales(
        self,
        status: Optional[CreditSaleStatus] = None,
    ) -> CreditSaleListResponse:
        """
        List sales, newest first, with totals over the listed sales.

        Statuses are resolved on read, and the filter applies to the
        resolved status.
        """
        today = self._clock()
        sales = await self._sale_repo.list_all()

        for sale in sales:
            apply_resolved_statuses(sale.installments, today)
            apply_sale_aggregates(sale)

        if status is not None:
            sales = [sale for sale in sales if sale.status == status]

        logger.info(
            "credit_sales_listed",
            status=status.value if status else None,
            count=len(sales),
        )

        return CreditSaleListResponse.from_entities(sales)

    async def get_payment_receipt(
        self,
        sale_id: UUID,
        installment_id: UUID,
    ) -> PaymentReceipt:
        """
        Build the receipt of a paid installment.

        Raises:
            CreditSaleNotFoundException: If the sale does not exist
            InstallmentNotFoundException: If the sale has no such installment
            InstallmentNotPaidException: If the installment is still open
        """
        sale = await self._get_sale(sale_id)
        installment = sale.find_installment(installment_id)
        if installment is None:
            raise InstallmentNotFoundException(str(installment_id))
        if not installment.is_paid:
            raise InstallmentNotPaidException(str(installment_id))

        # Remaining balance as it stood right after this payment
        paid_up_to = sum(
            inst.amount_cents
            for inst in sale.installments
            if inst.is_paid
            and (inst.paid_date, inst.installment_number)
            <= (installment.paid_date, installment.installment_number)
        )
        remaining = max(0, sale.total_cents - paid_up_to)

        return PaymentReceipt(
            credit_sale_id=str(sale.id),
            installment_id=str(installment.id),
            client_name=self._base_client_name(sale.client_name),
            products=sale.products,
            installment_number=installment.installment_number,
            number_of_installments=sale.number_of_installments,
            amount_cents=installment.amount_cents,
            amount_display=format_money(installment.amount_cents, self._settings),
            paid_date=installment.paid_date.isoformat(),
            payment_method=installment.payment_method,
            remaining_cents=remaining,
            remaining_display=format_money(remaining, self._settings),
        )

    async def _get_sale(self, sale_id: UUID) -> CreditSale:
        sale = await self._sale_repo.get_by_id(sale_id)
        if sale is None:
            logger.warning("credit_sale_not_found", credit_sale_id=str(sale_id))
            raise CreditSaleNotFoundException(str(sale_id))
        return sale

    async def _credit_sales_enabled(self) -> bool:
        stored = await self._settings_repo.get()
        if stored is None:
            return self._settings.credit_sales_enabled_default
        return stored.credit_sales_enabled

    async def _resolve_client(
        self,
        client_id: Optional[int],
        client_name: str,
    ) -> Optional[Client]:
        """
        Find the client a sale belongs to.

        An explicit client_id must exist. Without one, a case-insensitive
        full-name match links the sale only when exactly one client matches;
        homonyms stay unlinked.
        """
        if client_id is not None:
            client = await self._client_repo.get_by_id(client_id)
            if client is None:
                raise ValidationException(f"client_id {client_id} does not exist")
            return client

        matches = await self._client_repo.find_by_full_name(client_name)
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            logger.info(
                "client_name_ambiguous",
                client_name=client_name.strip(),
                matches=len(matches),
            )
        return None

    @staticmethod
    def _base_client_name(client_name: str) -> str:
        """Strip the ``|whatsapp`` suffix of linked client names."""
        return client_name.split("|", 1)[0].strip()

    def _payment_description(self, sale: CreditSale, installment: Installment) -> str:
        return (
            f"Fiado - {self._base_client_name(sale.client_name)} - "
            f"Parcela {installment.installment_number}/{sale.number_of_installments}"
        )
