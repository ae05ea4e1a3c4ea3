from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from memberhub.jwt_utils import generate_test_token
from profiles.models import Profile
from site_updates.models import SiteUpdate, SiteUpdateRead


class SiteUpdateViewsTest(APITestCase):
    def setUp(self):
        Profile.objects.create(id="admin-1", full_name="Site Admin", is_creator=True)
        self.update = SiteUpdate.objects.create(title="Welcome", body="Hello everyone", created_by="admin-1")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {generate_test_token('member-1')}")

    def test_list(self):
        response = self.client.get(reverse('site_updates:site-update-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        [result] = response.data['results']
        self.assertEqual(result['id'], str(self.update.pk))
        self.assertEqual(result['admin_name'], "Site Admin")
        self.assertFalse(result['is_read'])

    def test_mark_read_and_indicator(self):
        indicator = reverse('site_updates:inbox-indicator')
        self.assertEqual(self.client.get(indicator).data, {'has_unread': True})

        response = self.client.post(reverse('site_updates:site-update-read', kwargs={'site_update_id': self.update.pk}))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        self.assertEqual(self.client.get(indicator).data, {'has_unread': False})

    def test_read_all(self):
        SiteUpdate.objects.create(body="Second", created_by="admin-1")
        url = reverse('site_updates:site-update-read-all')

        self.assertEqual(self.client.post(url).data, {'marked': 2})
        self.assertEqual(self.client.post(url).data, {'marked': 0})
        self.assertEqual(SiteUpdateRead.objects.count(), 2)

    def test_indicator_for_anonymous_caller(self):
        self.client.credentials()
        response = self.client.get(reverse('site_updates:inbox-indicator'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'has_unread': False})

    def test_member_cannot_use_admin_endpoints(self):
        response = self.client.post(reverse('site_updates:admin-site-update-list'), {'body': 'Hi'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class AdminSiteUpdateViewsTest(APITestCase):
    def setUp(self):
        Profile.objects.create(id="admin-1", full_name="Site Admin", is_creator=True)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {generate_test_token('admin-1')}")

    def test_crud(self):
        list_url = reverse('site_updates:admin-site-update-list')

        response = self.client.post(list_url, {'title': 'News', 'body': 'Launch'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['created_by'], "admin-1")
        detail_url = reverse('site_updates:admin-site-update-detail', kwargs={'site_update_id': response.data['id']})

        response = self.client.patch(detail_url, {'body': 'Launch moved'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'News')
        self.assertEqual(response.data['body'], 'Launch moved')

        response = self.client.get(list_url)
        self.assertEqual(len(response.data['results']), 1)

        self.assertEqual(self.client.delete(detail_url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(SiteUpdate.objects.exists())

    def test_empty_body_is_rejected(self):
        response = self.client.post(reverse('site_updates:admin-site-update-list'), {'body': '  '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
