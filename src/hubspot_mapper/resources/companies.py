"""Companies API."""

from typing import Any, Dict, Iterable, Mapping, Optional
from urllib.parse import quote

from pydantic import BaseModel

from hubspot_mapper.mapping.convert import convert
from hubspot_mapper.paging.page import Page, PageResponse
from hubspot_mapper.resources.base import ResourceAPI, page_parameters, property_parameters


class Companies(ResourceAPI):
    """Access to companies (v2 companies API, v3 search)."""

    id_key = "companyId"
    deleted_key = "isDeleted"
    search_url = "crm/v3/objects/companies/search"

    def create(self, company: Any) -> BaseModel:
        response = self.rest.post("companies/v2/companies", self._properties_request(company))
        return self._to_entity(response)

    def update(self, company_id: int, company: Any, **kwargs: Any) -> BaseModel:
        request = self._properties_request(company, **kwargs)
        response = self.rest.put(f"companies/v2/companies/{company_id}", request)
        return self._to_entity(response)

    def batch_update(self, companies: Iterable[Any], **kwargs: Any) -> None:
        """Update several companies in one call; ids are taken from the entities."""
        self.rest.post("companies/v1/batch-async/update", self._batch_request(companies, **kwargs))

    def list_page(self, page: Optional[Page] = None, *props: str) -> PageResponse:
        parameters = page_parameters(page, "limit") + property_parameters("properties", props)
        response = self.rest.get("companies/v2/companies/paged", *parameters)
        return self._convert_list_response(response, "companies", "has-more")

    def recently_modified(self, page: Optional[Page] = None) -> PageResponse:
        response = self.rest.get("companies/v2/companies/recent/modified", *page_parameters(page, "count"))
        return self._convert_list_response(response, "results")

    def recently_created(self, page: Optional[Page] = None) -> PageResponse:
        response = self.rest.get("companies/v2/companies/recent/created", *page_parameters(page, "count"))
        return self._convert_list_response(response, "results")

    def search_by_domain(self, domain: str, page: Optional[Page] = None, *props: str) -> PageResponse:
        """
        List companies having a domain.

        The cursor of this endpoint is the company id of the last result.
        """
        request: Dict[str, Any] = {}
        if page is not None:
            if page.count > 0:
                request["limit"] = page.count
            if page.offset > 0:
                request["offset"] = {"isPrimary": True, "companyId": page.offset}
        if props:
            request["properties"] = list(props)

        response = self.rest.post(f"companies/v2/domains/{quote(domain)}/companies", request)
        pr = self._convert_list_response(response, "results", offset_key=None)
        if pr.has_more and isinstance(response, Mapping):
            offset = response.get("offset")
            if isinstance(offset, Mapping):
                pr.offset = convert(offset.get("companyId"), int)
        return pr

    def delete(self, company_id: int) -> None:
        self.rest.delete(f"companies/v2/companies/{company_id}")

    def get(self, company_id: int) -> BaseModel:
        response = self.rest.get(f"companies/v2/companies/{company_id}")
        return self._to_entity(response)
